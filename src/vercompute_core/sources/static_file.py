"""Pinned version file shipped in release tarballs."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ParseEmpty, StaticFileMissing
from ..models import SourceContext
from .base import Declined, Resolved, SourceResult, VersionSource

logger = logging.getLogger(__name__)


class StaticFileSource(VersionSource):
    """Read the first line of ``.version`` at the project root.

    A pinned file always represents a release, so the result is stable.
    """

    def __init__(self, filename: Optional[str] = None):
        self._filename = filename

    @property
    def name(self) -> str:
        return "static-file"

    def resolve(self, ctx: SourceContext) -> SourceResult:
        path = ctx.root / (self._filename or ctx.config.version_file)
        if not path.is_file():
            return Declined(self.name, StaticFileMissing(f"{path} not found"))

        with path.open(encoding="utf-8") as fh:
            raw = fh.readline().rstrip()
        if not raw:
            logger.warning(f"Ignoring {path}: first line is empty")
            return Declined(self.name, ParseEmpty(f"{path} has an empty first line"))

        logger.debug(f"Pinned version {raw} read from {path}")
        return Resolved(raw=raw, stable=True, source=self.name)

"""Version declared in a foreign package manifest (ROS ``package.xml``)."""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..errors import ManifestFieldMissing, ManifestMissing
from ..models import SourceContext
from ..parser import is_stable
from .base import Declined, Resolved, SourceResult, VersionSource

logger = logging.getLogger(__name__)

_VERSION_ELEMENT = re.compile(r"<version(?:\s[^>]*)?>(.*?)</version>", re.DOTALL)


def extract_manifest_version(text: str) -> Optional[str]:
    """Return the text of the first ``<version>`` element, or None."""
    match = _VERSION_ELEMENT.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


class ManifestFileSource(VersionSource):
    """Read ``<version>x.y.z</version>`` out of ``package.xml``."""

    def __init__(self, filename: Optional[str] = None):
        self._filename = filename

    @property
    def name(self) -> str:
        return "manifest"

    def resolve(self, ctx: SourceContext) -> SourceResult:
        path = ctx.root / (self._filename or ctx.config.manifest_file)
        if not path.is_file():
            return Declined(self.name, ManifestMissing(f"{path} not found"))

        with path.open(encoding="utf-8") as fh:
            text = fh.read()
        logger.debug(f"Manifest {path}: {len(text)} characters")

        raw = extract_manifest_version(text)
        if raw is None:
            return Declined(self.name, ManifestFieldMissing(f"No <version> element in {path}"))

        return Resolved(raw=raw, stable=is_stable(raw), source=self.name)

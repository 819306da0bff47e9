"""Version derived from git tag history.

The describe query names HEAD relative to the nearest ``v*`` tag, e.g.
``v0.5-2-g034f`` two commits after ``v0.5``. The tag prefix is stripped and
``-dirty`` is appended when tracked files differ from HEAD. When no tag is
reachable the nested fallback source (the package manifest) is consulted,
and the dirty marker applies to its answer as well.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..errors import (
    HistoryTruncated,
    NoMatchingTag,
    ParseEmpty,
    RepositoryMissing,
    ToolUnavailable,
    VersionError,
)
from ..models import SourceContext
from ..parser import is_stable, parse_describe, with_dirty_suffix
from ..vcs.base import VcsAdapter
from .base import Declined, Resolved, SourceResult, VersionSource

logger = logging.getLogger(__name__)


class VcsDescribeSource(VersionSource):
    """Resolve from ``git describe`` with an optional nested fallback."""

    def __init__(self, fallback: Optional[VersionSource] = None):
        self._fallback = fallback

    @property
    def name(self) -> str:
        return "vcs"

    def resolve(self, ctx: SourceContext) -> SourceResult:
        vcs = ctx.vcs
        if vcs is None:
            reason: VersionError = ToolUnavailable(f"{ctx.config.git} not found")
            logger.warning(f"Failed to compute the version number from git: {reason}")
            return self._fall_back(ctx, reason, dirty=False)

        if vcs.git_dir(ctx.root) is None:
            reason = RepositoryMissing(f"{ctx.root} is not inside a git work tree")
            logger.info(f"{reason}; skipping git describe")
            return self._fall_back(ctx, reason, dirty=False)

        truncated = self._repair_history(vcs, ctx) if ctx.config.unshallow else None

        described = self._describe(vcs, ctx)
        dirty = self._is_dirty(vcs, ctx)

        if isinstance(described, VersionError):
            if truncated is not None and isinstance(described, NoMatchingTag):
                described = HistoryTruncated(f"{truncated}; {described}")
            return self._fall_back(ctx, described, dirty=dirty)

        return Resolved(
            raw=with_dirty_suffix(described, dirty),
            stable=is_stable(described),
            source=self.name,
            dirty=dirty,
        )

    def _repair_history(self, vcs: VcsAdapter, ctx: SourceContext) -> Optional[HistoryTruncated]:
        """Deepen a shallow clone once. Returns the failure, if any."""
        if not vcs.is_shallow_clone(ctx.root):
            return None
        logger.info("Shallow clone detected; fetching full history to compute tag distance")
        code = vcs.fetch_full_history(ctx.root)
        if code == 0:
            return None
        failure = HistoryTruncated(f"git fetch --unshallow exited with {code}")
        logger.warning(f"{failure}; describing the truncated history")
        return failure

    def _describe(self, vcs: VcsAdapter, ctx: SourceContext) -> Union[str, VersionError]:
        """Return the tag-stripped version, or the error explaining why there is none."""
        result = vcs.describe(ctx.root, ctx.config.tag_pattern, ctx.config.abbrev)
        if not result.ok:
            reason = NoMatchingTag(result.stderr or f"git describe exited with {result.exit_code}")
            logger.warning(f"Failed to compute the version number, 'git describe' failed: {reason}")
            return reason

        version = parse_describe(result.stdout).version(ctx.config.tag_prefix)
        if not version:
            reason = ParseEmpty(f"'git describe' returned {result.stdout!r}")
            logger.warning(f"Failed to compute the version number: {reason}")
            return reason
        return version

    def _is_dirty(self, vcs: VcsAdapter, ctx: SourceContext) -> bool:
        result = vcs.diff_summary_against_head(ctx.root)
        dirty = not result.ok or bool(result.stdout)
        if dirty:
            logger.debug(f"Working tree is dirty: {result.stdout or result.stderr}")
        return dirty

    def _fall_back(self, ctx: SourceContext, reason: VersionError, dirty: bool) -> SourceResult:
        if self._fallback is None:
            return Declined(self.name, reason)

        result = self._fallback.resolve(ctx)
        if isinstance(result, Declined):
            logger.debug(f"Fallback {result.source} declined: {result.reason}")
            return Declined(self.name, reason)

        logger.info(f"Using version {result.raw} from {result.source} after: {reason}")
        return Resolved(
            raw=with_dirty_suffix(result.raw, dirty),
            stable=result.stable,
            source=result.source,
            dirty=dirty,
        )

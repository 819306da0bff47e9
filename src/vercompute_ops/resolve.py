"""Version resolution: try each source in priority order, then split the winner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from vercompute_core.config import ConfigLoader, VersionConfig
from vercompute_core.errors import ConfigError
from vercompute_core.models import UNKNOWN, ResolvedVersion, SourceContext
from vercompute_core.parser import split_version
from vercompute_core.sources import (
    Declined,
    ManifestFileSource,
    StaticFileSource,
    VcsDescribeSource,
    VersionSource,
)
from vercompute_core.vcs import GitAdapter, VcsAdapter

logger = logging.getLogger(__name__)

# Sentinel distinguishing "locate git from config" from an explicit None.
_LOCATE = object()


@dataclass
class _ResolutionBuilder:
    """Mutable state for a single resolution, frozen by build()."""
    raw: str = UNKNOWN
    stable: bool = False
    dirty: bool = False
    source: str = "none"

    def build(self) -> ResolvedVersion:
        major, minor, patch = split_version(self.raw)
        return ResolvedVersion(
            raw=self.raw,
            stable=self.stable and self.raw != UNKNOWN,
            major=major,
            minor=minor,
            patch=patch,
            dirty=self.dirty,
            source=self.source,
        )


def default_sources() -> List[VersionSource]:
    """Pinned file first, then git describe with the manifest as its fallback."""
    return [
        StaticFileSource(),
        VcsDescribeSource(fallback=ManifestFileSource()),
    ]


class VersionResolver:
    """Run version sources in order and stop at the first one that resolves."""

    def __init__(self, sources: Optional[Sequence[VersionSource]] = None) -> None:
        self._sources: List[VersionSource] = list(sources) if sources is not None else default_sources()

    @property
    def sources(self) -> List[VersionSource]:
        return list(self._sources)

    def resolve(self, ctx: SourceContext) -> ResolvedVersion:
        """Resolve a version for ``ctx.root``. Never raises; UNKNOWN is a valid outcome."""
        builder = _ResolutionBuilder()

        for source in self._sources:
            try:
                result = source.resolve(ctx)
            except Exception as e:
                logger.warning(f"Version source {source.name} failed unexpectedly: {e}")
                continue

            if isinstance(result, Declined):
                logger.debug(f"Version source {result.source} declined: {result.reason}")
                continue

            builder.raw = result.raw
            builder.stable = result.stable
            builder.dirty = result.dirty
            builder.source = result.source
            break
        else:
            logger.warning(f"Failed to compute the version number for {ctx.root}; using {UNKNOWN}")

        return builder.build()


def build_context(
    root: Optional[Path] = None,
    config: Optional[VersionConfig] = None,
    git=_LOCATE,
) -> SourceContext:
    """Assemble the read-only context for one resolution.

    ``git`` may be an adapter, None (treat git as unavailable), or omitted to
    locate the executable named in the config.
    """
    root = Path(root) if root is not None else Path.cwd()
    root = root.resolve()

    if config is None:
        try:
            config = ConfigLoader.load(root)
        except ConfigError as e:
            logger.warning(f"Ignoring vercompute config: {e}")
            config = VersionConfig()

    vcs: Optional[VcsAdapter]
    if git is _LOCATE:
        vcs = GitAdapter.locate(config.git)
    else:
        vcs = git

    return SourceContext(root=root, vcs=vcs, config=config)


def resolve_version(
    root: Optional[Path] = None,
    config: Optional[VersionConfig] = None,
    git=_LOCATE,
    sources: Optional[Sequence[VersionSource]] = None,
) -> ResolvedVersion:
    """Resolve the version of the project at ``root`` (default: current directory)."""
    ctx = build_context(root, config=config, git=git)
    return VersionResolver(sources).resolve(ctx)

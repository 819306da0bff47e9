"""Data model shared by the version sources and the resolver."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from .config import VersionConfig
from .vcs.base import VcsAdapter

UNKNOWN = "UNKNOWN"
DIRTY_SUFFIX = "-dirty"


class VersionComponents(NamedTuple):
    """Major/minor/patch tokens. ``None`` means the segment was not present."""
    major: Optional[str]
    minor: Optional[str]
    patch: Optional[str]


@dataclass(frozen=True)
class DescribeResult:
    """Decoded ``TAG[-N-SHA][-dirty]`` output of ``git describe``."""
    tag: str
    commits_since: int = 0
    sha_prefix: Optional[str] = None  # abbreviated object name as printed by git
    dirty: bool = False
    text: str = ""  # describe output as printed, empty when built by hand

    @property
    def exact(self) -> bool:
        """True when HEAD is the tagged commit itself."""
        return self.sha_prefix is None

    def version(self, tag_prefix: str = "v") -> str:
        """Format the version string with the tag prefix stripped.

        Decoded output is returned as git printed it apart from the prefix,
        so a tag such as ``v2024-01-15`` keeps its zero padding.
        """
        from .parser import strip_tag_prefix

        base = strip_tag_prefix(self.tag, tag_prefix)
        if not base:
            return base
        if self.text:
            return strip_tag_prefix(self.text, tag_prefix)
        if self.exact:
            return base
        return f"{base}-{self.commits_since}-{self.sha_prefix}"


@dataclass(frozen=True)
class SourceContext:
    """Read-only input handed to every version source for one resolution."""
    root: Path
    vcs: Optional[VcsAdapter] = None
    config: VersionConfig = field(default_factory=VersionConfig)


@dataclass(frozen=True)
class ResolvedVersion:
    """Final outcome of one resolution call."""
    raw: str
    stable: bool
    major: Optional[str]
    minor: Optional[str]
    patch: Optional[str]
    dirty: bool = False
    source: str = "none"

    @property
    def known(self) -> bool:
        return self.raw != UNKNOWN

    @property
    def components(self) -> VersionComponents:
        return VersionComponents(self.major, self.minor, self.patch)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

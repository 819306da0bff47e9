"""VCS abstraction base types."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol


@dataclass(frozen=True)
class VcsQueryResult:
    """Outcome of one VCS command."""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class VcsAdapter(Protocol):
    """Query surface the describe source needs from a version-control tool."""

    def git_dir(self, repo_root: Path) -> Optional[Path]:
        """Return the repository metadata directory, or None outside a work tree."""
        ...

    def is_shallow_clone(self, repo_root: Path) -> bool:
        """Check whether the local history is truncated."""
        ...

    def fetch_full_history(self, repo_root: Path) -> int:
        """Deepen a shallow clone; return the command's exit code."""
        ...

    def describe(self, repo_root: Path, tag_pattern: str = "v*", abbrev: int = 4) -> VcsQueryResult:
        """Name HEAD relative to the nearest tag matching ``tag_pattern``."""
        ...

    def diff_summary_against_head(self, repo_root: Path) -> VcsQueryResult:
        """List tracked files that differ from HEAD."""
        ...

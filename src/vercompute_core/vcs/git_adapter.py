"""Git VCS adapter."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .base import VcsQueryResult

logger = logging.getLogger(__name__)

# Exit code reported when the executable cannot be started at all.
EXEC_FAILED = 127


class GitAdapter:
    """Git VCS adapter."""

    def __init__(self, executable: str = "git"):
        self.executable = executable

    @classmethod
    def locate(cls, executable: str = "git") -> Optional["GitAdapter"]:
        """Return an adapter bound to the resolved executable, or None if not found."""
        found = shutil.which(executable)
        if found is None:
            logger.debug(f"git executable not found: {executable}")
            return None
        return cls(found)

    def _run(self, args: List[str], repo_root: Path) -> VcsQueryResult:
        cmd = [self.executable, *args]
        try:
            proc = subprocess.run(
                cmd,
                cwd=repo_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.warning(f"Failed to run {' '.join(cmd)}: {e}")
            return VcsQueryResult(exit_code=EXEC_FAILED, stderr=str(e))
        logger.debug(f"{' '.join(cmd)} -> {proc.returncode}: {proc.stdout.strip()!r}")
        return VcsQueryResult(
            exit_code=proc.returncode,
            stdout=proc.stdout.strip(),
            stderr=proc.stderr.strip(),
        )

    def git_dir(self, repo_root: Path) -> Optional[Path]:
        """Resolve ``git rev-parse --git-dir`` relative to the work tree."""
        result = self._run(["rev-parse", "--git-dir"], repo_root)
        if not result.ok or not result.stdout:
            return None
        path = Path(result.stdout)
        if not path.is_absolute():
            path = (repo_root / path).resolve()
        return path

    def is_shallow_clone(self, repo_root: Path) -> bool:
        """A shallow clone keeps its graft points in ``<git-dir>/shallow``."""
        git_dir = self.git_dir(repo_root)
        return git_dir is not None and (git_dir / "shallow").exists()

    def fetch_full_history(self, repo_root: Path) -> int:
        # Tags are requested explicitly so the ones on the newly fetched ancestors arrive too.
        return self._run(["fetch", "--unshallow", "--tags"], repo_root).exit_code

    def describe(self, repo_root: Path, tag_pattern: str = "v*", abbrev: int = 4) -> VcsQueryResult:
        return self._run(
            ["describe", "--tags", f"--abbrev={abbrev}", f"--match={tag_pattern}", "HEAD"],
            repo_root,
        )

    def diff_summary_against_head(self, repo_root: Path) -> VcsQueryResult:
        # Refresh cached stat data first or diff-index reports files that were only touched.
        self._run(["update-index", "-q", "--refresh"], repo_root)
        return self._run(["diff-index", "--name-only", "HEAD"], repo_root)

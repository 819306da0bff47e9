from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pytest
from hypothesis import settings

from vercompute_core.vcs import VcsQueryResult

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("vercompute-tests", database=None)
settings.load_profile("vercompute-tests")


@dataclass
class FakeVcs:
    """In-memory stand-in for GitAdapter that records the queries it receives."""
    describe_result: VcsQueryResult = field(default_factory=lambda: VcsQueryResult(0, "v0.1"))
    diff_result: VcsQueryResult = field(default_factory=lambda: VcsQueryResult(0, ""))
    in_work_tree: bool = True
    shallow: bool = False
    fetch_code: int = 0
    # describe output once the history has been deepened
    deepened_describe: Optional[VcsQueryResult] = None
    calls: List[str] = field(default_factory=list)

    def git_dir(self, repo_root: Path) -> Optional[Path]:
        self.calls.append("git_dir")
        return repo_root / ".git" if self.in_work_tree else None

    def is_shallow_clone(self, repo_root: Path) -> bool:
        self.calls.append("is_shallow_clone")
        return self.shallow

    def fetch_full_history(self, repo_root: Path) -> int:
        self.calls.append("fetch_full_history")
        if self.fetch_code == 0:
            self.shallow = False
            if self.deepened_describe is not None:
                self.describe_result = self.deepened_describe
        return self.fetch_code

    def describe(self, repo_root: Path, tag_pattern: str = "v*", abbrev: int = 4) -> VcsQueryResult:
        self.calls.append(f"describe:{tag_pattern}:{abbrev}")
        return self.describe_result

    def diff_summary_against_head(self, repo_root: Path) -> VcsQueryResult:
        self.calls.append("diff_summary_against_head")
        return self.diff_result


NO_TAG = VcsQueryResult(128, "", "fatal: No names found, cannot describe anything.")


@pytest.fixture
def fake_vcs():
    return FakeVcs()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


def write_manifest(root: Path, version: str) -> Path:
    path = root / "package.xml"
    path.write_text(
        f"""<?xml version="1.0"?>
<package format="3">
  <name>demo</name>
  <version>{version}</version>
  <description>demo package</description>
</package>
""",
        encoding="utf-8",
    )
    return path

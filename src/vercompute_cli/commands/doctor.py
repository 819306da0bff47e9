"""
doctor.py - Environment health check command.

Reports which version sources are usable for a project root.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from vercompute_core.config import ConfigLoader, VersionConfig
from vercompute_core.errors import ConfigError
from vercompute_core.vcs import GitAdapter
from vercompute_ops.resolve import resolve_version

from ..util import configure_logging

console = Console()


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]
    version: Optional[str] = None


def check_config(root: Path) -> tuple[CheckResult, VersionConfig]:
    try:
        path, _ = ConfigLoader.find_config(root)
        config = ConfigLoader.load(root)
    except ConfigError as e:
        return CheckResult(name="Config", passed=False, message="Invalid config", details=str(e)), VersionConfig()
    where = str(path) if path else "built-in defaults"
    return CheckResult(name="Config", passed=True, message=f"Using {where}"), config


def check_git(root: Path, config: VersionConfig) -> CheckResult:
    """Check git availability, work tree and shallow state."""
    git = GitAdapter.locate(config.git)
    if git is None:
        return CheckResult(
            name="Git",
            passed=True,
            message=f"'{config.git}' not found; tag history is unavailable",
            details="Install git or set VERCOMPUTE_GIT to derive versions from tags.",
        )
    git_dir = git.git_dir(root)
    if git_dir is None:
        return CheckResult(name="Git", passed=True, message=f"{git.executable} found; {root} is not a work tree")
    shallow = " (shallow clone, history will be fetched)" if git.is_shallow_clone(root) else ""
    return CheckResult(name="Git", passed=True, message=f"Work tree at {git_dir.parent}{shallow}")


def check_file(name: str, path: Path) -> CheckResult:
    if path.is_file():
        return CheckResult(name=name, passed=True, message=f"Found {path.name}")
    return CheckResult(name=name, passed=True, message=f"No {path.name} (source skipped)")


def run_doctor(root: Path) -> DoctorResult:
    """Run all doctor checks."""
    root = root.resolve()
    config_check, config = check_config(root)
    checks = [
        config_check,
        check_file("Pinned version", root / config.version_file),
        check_git(root, config),
        check_file("Manifest", root / config.manifest_file),
    ]

    resolved = resolve_version(root, config=config)
    if resolved.known:
        checks.append(CheckResult(
            name="Resolution",
            passed=True,
            message=f"{resolved.raw} from {resolved.source}",
            details=f"major={resolved.major} minor={resolved.minor} patch={resolved.patch} stable={resolved.stable}",
        ))
    else:
        checks.append(CheckResult(
            name="Resolution",
            passed=False,
            message="Version is UNKNOWN",
            details="Add a .version file, a v* tag, or a <version> element in package.xml.",
        ))

    all_passed = all(c.passed for c in checks)
    return DoctorResult(all_passed=all_passed, checks=checks, version=resolved.raw)


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title="vercompute doctor", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print("\n[green bold]All checks passed![/green bold]")
    else:
        console.print("\n[red bold]Some checks failed.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "all_passed": result.all_passed,
        "version": result.version,
        "checks": [asdict(c) for c in result.checks],
    }
    typer.echo(json.dumps(output, indent=2))


def doctor(
    ctx: typer.Context,
    path: Path = typer.Option(Path("."), "--path", help="Project root to inspect"),
    format: str = typer.Option(
        "plain", "--format", "-f",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check which version sources are usable.

    Verifies:
    - The config is valid
    - Which of .version, git tags and package.xml are available
    - That the version resolves to something other than UNKNOWN
    """
    configure_logging((ctx.obj or {}).get("verbosity") or "warning")
    result = run_doctor(path)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)

"""Configuration loading.

Settings come from the first of:

1. the file named by ``$VERCOMPUTE_CONFIG_PATH``
2. ``<root>/vercompute.toml``
3. the ``[tool.vercompute]`` table of ``<root>/pyproject.toml``
4. built-in defaults

``$VERCOMPUTE_GIT`` overrides the git executable whatever the source.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from .errors import ConfigError

CONFIG_FILENAME = "vercompute.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_PATH_ENV = "VERCOMPUTE_CONFIG_PATH"
GIT_ENV = "VERCOMPUTE_GIT"

_VERBOSITY = {"debug", "info", "warn", "warning", "error", "off", "none", "disabled"}


class LogConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    verbosity: str = "info"

    @field_validator("verbosity")
    @classmethod
    def check_verbosity(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in _VERBOSITY:
            raise ValueError("log.verbosity must be one of: debug, info, warn, error, off")
        return value


class VersionConfig(BaseModel):
    """Effective settings for one resolution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version_file: str = ".version"
    manifest_file: str = "package.xml"
    tag_pattern: str = "v*"
    tag_prefix: str = "v"
    abbrev: int = Field(default=4, ge=4, le=40)
    git: str = "git"
    unshallow: bool = True
    log: LogConfig = Field(default_factory=LogConfig)

    @field_validator("version_file", "manifest_file", "tag_pattern", "git")
    @classmethod
    def non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class ConfigLoader:
    """Locate, read and validate vercompute settings for a project root."""

    @staticmethod
    def find_config(root: Path) -> Tuple[Optional[Path], Optional[str]]:
        """Return ``(path, table)`` of the config in effect; table is the TOML key path."""
        override = os.getenv(CONFIG_PATH_ENV, "").strip()
        if override:
            path = Path(override)
            if not path.is_absolute():
                path = (root / path).resolve()
            if not path.exists():
                raise ConfigError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
            return path, "tool.vercompute" if path.name == PYPROJECT_FILENAME else None

        candidate = root / CONFIG_FILENAME
        if candidate.exists():
            return candidate, None

        pyproject = root / PYPROJECT_FILENAME
        if pyproject.exists():
            data = ConfigLoader._read_toml(pyproject)
            if "vercompute" in data.get("tool", {}):
                return pyproject, "tool.vercompute"

        return None, None

    @staticmethod
    def _read_toml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ConfigError(f"{path} is not UTF-8 encoded: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def load_raw(root: Path) -> Tuple[Optional[Path], Dict[str, Any]]:
        """Return the config path and its unvalidated table (empty when defaulted)."""
        path, table = ConfigLoader.find_config(root)
        if path is None:
            return None, {}
        data: Any = ConfigLoader._read_toml(path)
        if table:
            for segment in table.split("."):
                data = data.get(segment, {}) if isinstance(data, dict) else {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a TOML table: {path}")
        return path, data

    @staticmethod
    def load(root: Path) -> VersionConfig:
        """Load and validate the effective config for ``root``.

        Raises:
            ConfigError: the file is unreadable or a value is invalid
        """
        path, data = ConfigLoader.load_raw(root)
        data = dict(data)
        git_override = os.getenv(GIT_ENV, "").strip()
        if git_override:
            data["git"] = git_override
        try:
            return VersionConfig(**data)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigError(f"Invalid config {path or '<defaults>'}: {errors}") from exc

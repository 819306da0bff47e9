"""Error taxonomy for version resolution.

Every resolution error is recoverable by falling back to the next source;
none of them escape :func:`vercompute_ops.resolve.resolve_version`.
"""

from __future__ import annotations


class VersionError(Exception):
    """Base class for a version source declining."""


class ToolUnavailable(VersionError):
    """The git executable could not be located."""


class RepositoryMissing(VersionError):
    """The project root is not inside a git work tree."""


class NoMatchingTag(VersionError):
    """``git describe`` found no reachable tag matching the pattern."""


class HistoryTruncated(VersionError):
    """The clone is shallow and deepening its history failed."""


class StaticFileMissing(VersionError):
    """No pinned version file at the project root."""


class ManifestMissing(VersionError):
    """No package manifest at the project root."""


class ManifestFieldMissing(VersionError):
    """The package manifest has no usable <version> element."""


class ParseEmpty(VersionError):
    """A source produced an empty version string."""


class ConfigError(Exception):
    """Invalid or unreadable vercompute configuration."""

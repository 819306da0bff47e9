from .base import Declined, Resolved, SourceResult, VersionSource
from .manifest_file import ManifestFileSource
from .static_file import StaticFileSource
from .vcs_describe import VcsDescribeSource

__all__ = [
    "Declined",
    "ManifestFileSource",
    "Resolved",
    "SourceResult",
    "StaticFileSource",
    "VcsDescribeSource",
    "VersionSource",
]

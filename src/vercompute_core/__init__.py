from .models import (
    DIRTY_SUFFIX,
    UNKNOWN,
    DescribeResult,
    ResolvedVersion,
    SourceContext,
    VersionComponents,
)
from .parser import is_stable, parse_describe, split_version, strip_tag_prefix, with_dirty_suffix

__all__ = [
    "DIRTY_SUFFIX",
    "UNKNOWN",
    "DescribeResult",
    "ResolvedVersion",
    "SourceContext",
    "VersionComponents",
    "is_stable",
    "parse_describe",
    "split_version",
    "strip_tag_prefix",
    "with_dirty_suffix",
]

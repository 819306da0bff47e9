"""Pure string helpers: describe decoding, stability, dirty suffix, component split."""

from __future__ import annotations

import re
from typing import Optional

from .models import DIRTY_SUFFIX, UNKNOWN, DescribeResult, VersionComponents

# TAG-N-SHA with an optional trailing -dirty; the tag itself may contain hyphens.
_DESCRIBE_PATTERN = re.compile(
    r"^(?P<tag>.+?)-(?P<commits>\d+)-(?P<sha>g?[0-9a-fA-F]+)(?P<dirty>-dirty)?$"
)

# A commit-distance suffix glued to a dot-segment, e.g. "5-2-034f" in "0.5-2-034f".
_DISTANCE_SUFFIX = re.compile(r"^(?P<base>[^-]*)-(?P<commits>\d+)-g?[0-9a-fA-F]+(?:-dirty)?$")


def parse_describe(text: str) -> DescribeResult:
    """Decode ``git describe`` output into a :class:`DescribeResult`.

    ``v0.5`` decodes to an exact tag, ``v0.5-2-g034f`` to tag ``v0.5`` two
    commits ahead at ``g034f``. A trailing ``-dirty`` is recognised in both
    forms. The stripped output is kept in ``text`` so formatting never
    rewrites what git printed.
    """
    text = text.strip()
    match = _DESCRIBE_PATTERN.match(text)
    if match:
        return DescribeResult(
            tag=match.group("tag"),
            commits_since=int(match.group("commits")),
            sha_prefix=match.group("sha"),
            dirty=match.group("dirty") is not None,
            text=text,
        )
    dirty = text.endswith(DIRTY_SUFFIX)
    tag = text[: -len(DIRTY_SUFFIX)] if dirty else text
    return DescribeResult(tag=tag, dirty=dirty, text=text)


def strip_tag_prefix(tag: str, prefix: str = "v") -> str:
    """Remove one leading tag prefix (``v1.2`` -> ``1.2``)."""
    if prefix and tag.startswith(prefix):
        return tag[len(prefix):]
    return tag


def is_stable(raw: str) -> bool:
    """A version is stable when it carries no ``-N-SHA`` (or other) hyphen suffix."""
    return raw != UNKNOWN and "-" not in raw


def with_dirty_suffix(raw: str, dirty: bool) -> str:
    """Append ``-dirty`` once when the tree is dirty; UNKNOWN is left alone."""
    if not dirty or raw == UNKNOWN or raw.endswith(DIRTY_SUFFIX):
        return raw
    return raw + DIRTY_SUFFIX


def split_version(raw: str) -> VersionComponents:
    """Split a resolved version into major, minor and patch tokens.

    The string is split on ``.``. The third segment is cut at its first
    hyphen, so ``1.2.3-4-abcd`` gives patch ``3`` and the distance, hash and
    dirty marker are lost from the components while ``raw`` keeps them.
    When there are only two segments and the second carries a commit-distance
    suffix (``0.5-2-034f``), the distance becomes the patch.
    """
    if raw == UNKNOWN:
        return VersionComponents(UNKNOWN, UNKNOWN, UNKNOWN)

    segments = raw.split(".")
    major: Optional[str] = segments[0] if len(segments) > 0 else None
    minor: Optional[str] = segments[1] if len(segments) > 1 else None
    patch: Optional[str] = segments[2].split("-")[0] if len(segments) > 2 else None

    if len(segments) == 2:
        match = _DISTANCE_SUFFIX.match(segments[1])
        if match:
            minor = match.group("base")
            patch = match.group("commits")

    return VersionComponents(major, minor, patch)

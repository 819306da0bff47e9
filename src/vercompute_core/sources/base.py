"""Version source interface and its result variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from ..errors import VersionError
from ..models import SourceContext


@dataclass(frozen=True)
class Resolved:
    """A source produced a version string."""
    raw: str
    stable: bool
    source: str
    dirty: bool = False


@dataclass(frozen=True)
class Declined:
    """A source had nothing to offer; the resolver moves on."""
    source: str
    reason: Optional[VersionError] = None


SourceResult = Union[Resolved, Declined]


class VersionSource(ABC):
    """Abstract base class for version sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier reported in ``ResolvedVersion.source``."""

    @abstractmethod
    def resolve(self, ctx: SourceContext) -> SourceResult:
        """Produce a version for ``ctx.root`` or decline."""

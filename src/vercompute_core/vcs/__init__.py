from .base import VcsAdapter, VcsQueryResult
from .git_adapter import GitAdapter

__all__ = ["GitAdapter", "VcsAdapter", "VcsQueryResult"]

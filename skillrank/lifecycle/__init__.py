"""Freshness lifecycle: tier scheduling, access recording, dedup, resurrection."""

from .access import AccessRecorder
from .background import BackgroundRunner
from .dedup import DedupGuard
from .resurrection import ResurrectionChecker, ResurrectionClient, ResurrectionResult
from .scheduler import needs_update

__all__ = [
    "AccessRecorder",
    "BackgroundRunner",
    "DedupGuard",
    "ResurrectionChecker",
    "ResurrectionClient",
    "ResurrectionResult",
    "needs_update",
]

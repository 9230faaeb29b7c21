"""Pipeline stages: tiered discovery (Stage A), relevance ranking (Stage B), orchestration."""

from .discovery import discover_candidates
from .orchestrator import get_related_items, rank_related
from .ranking import rank_candidates, select_weights

__all__ = [
    "discover_candidates",
    "get_related_items",
    "rank_candidates",
    "rank_related",
    "select_weights",
]

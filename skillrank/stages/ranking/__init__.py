"""
Stage B ranking: blend overlap, author, popularity, freshness and discovery tier.

Public API: rank_candidates, select_weights.
- core: main orchestration (rank_candidates).
- Submodules: weights, blended_scoring.
"""

from .blended_scoring import build_scored_candidate, discovery_score
from .core import rank_candidates
from .weights import select_weights

__all__ = [
    "build_scored_candidate",
    "discovery_score",
    "rank_candidates",
    "select_weights",
]

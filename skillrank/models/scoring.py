"""
Scoring model: ScoredCandidate and the per-signal score helpers used by ranking.

Contains:
- ScoredCandidate: a candidate with every signal score and its final relevance
- days_between, popularity_score, freshness_score, overlap_score
"""

import math
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from .item import Candidate


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from earlier to later."""
    return (later - earlier).total_seconds() / 86400.0


def popularity_score(
    stars: int,
    trending_score: float,
    star_factor: float = 20.0,
    trending_factor: float = 2.0,
    cap: float = 100.0,
) -> float:
    """Log-scaled stars plus trending momentum, capped (0-100)."""
    raw = math.log10(max(stars, 0) + 1) * star_factor + trending_score * trending_factor
    return min(cap, raw)


def freshness_score(
    last_commit_at: Optional[datetime],
    now: datetime,
    decay_per_day: float = 0.5,
    default_days: float = 200.0,
) -> float:
    """Linear decay by days since last commit; unknown commit counts as default_days old."""
    commit = last_commit_at if last_commit_at is not None else now - timedelta(days=default_days)
    # Commits stamped in the future score as brand new
    days = max(0.0, days_between(commit, now))
    return max(0.0, 100.0 - days * decay_per_day)


def overlap_score(shared: int, total: int) -> float:
    """Share of the source's signal values found on the candidate (0-100)."""
    return shared / max(total, 1) * 100.0


class ScoredCandidate(BaseModel):
    """A candidate with all its scoring components."""

    candidate: Candidate
    shared_categories: int
    shared_tags: int
    category_score: float
    tag_score: float
    author_score: float
    popularity_score: float
    freshness_score: float
    discovery_score: float
    final_score: float

    @property
    def trending_score(self) -> float:
        return self.candidate.row.trending_score

    @property
    def stars(self) -> int:
        return self.candidate.row.stars

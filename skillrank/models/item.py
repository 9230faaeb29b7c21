"""
Item model: typed representation of a cataloged skill.

Used by the access recorder (ItemState), candidate discovery (CandidateRow,
Candidate) and the related-items response instead of raw store rows.
Built from store/JSON dicts via Item.model_validate(d).
"""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tier import Tier


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes; leave aware ones and None untouched."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _Timestamped(BaseModel):
    """Normalizes every datetime field to an aware UTC value."""

    @field_validator("*", mode="after")
    @classmethod
    def _aware(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value


class Item(_Timestamped):
    """
    Full catalog record for a skill.

    Only id is required so fixtures and partial store rows validate; counters
    default to zero and lifecycle timestamps to None.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    slug: str = ""
    name: str = ""
    description: Optional[str] = None
    repo_owner: str = ""
    repo_name: str = ""
    source_type: str = "github"
    visibility: str = "public"

    stars: int = 0
    forks: int = 0
    trending_score: float = 0.0

    last_commit_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    indexed_at: Optional[datetime] = None

    tier: Tier = Field(default=None, validate_default=True)
    next_update_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None
    access_count_7d: int = 0
    access_count_30d: int = 0

    categories: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tier", mode="before")
    @classmethod
    def _parse_tier(cls, value: Any) -> Tier:
        return Tier.parse(value)

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"

    def state(self) -> "ItemState":
        return ItemState(
            tier=self.tier,
            next_update_at=self.next_update_at,
            last_accessed_at=self.last_accessed_at,
        )


class ItemState(_Timestamped):
    """Lifecycle fields the access recorder reads before touching counters."""

    tier: Tier = Field(default=None, validate_default=True)
    next_update_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None

    @field_validator("tier", mode="before")
    @classmethod
    def _parse_tier(cls, value: Any) -> Tier:
        return Tier.parse(value)


class CandidateRow(_Timestamped):
    """
    One row returned by a discovery query.

    shared_count is the overlap count computed by the category/tag overlap
    queries; author and trending queries leave it at 0.
    """

    id: str
    slug: str = ""
    name: str = ""
    description: Optional[str] = None
    repo_owner: str = ""
    repo_name: str = ""
    stars: int = 0
    forks: int = 0
    trending_score: float = 0.0
    updated_at: Optional[datetime] = None
    last_commit_at: Optional[datetime] = None
    shared_count: int = 0

    @classmethod
    def from_item(cls, item: Item, shared_count: int = 0) -> "CandidateRow":
        return cls(
            id=item.id,
            slug=item.slug,
            name=item.name,
            description=item.description,
            repo_owner=item.repo_owner,
            repo_name=item.repo_name,
            stars=item.stars,
            forks=item.forks,
            trending_score=item.trending_score,
            updated_at=item.updated_at,
            last_commit_at=item.last_commit_at,
            shared_count=shared_count,
        )


class DiscoveryTier(IntEnum):
    """Fallback pass that found a candidate (lower = stronger signal)."""

    CATEGORY = 1
    TAG = 2
    AUTHOR = 3
    TRENDING = 4


class Candidate(BaseModel):
    """A discovered row tagged with the pass that found it."""

    row: CandidateRow
    discovery_tier: DiscoveryTier

    @property
    def id(self) -> str:
        return self.row.id


class RelatedItem(_Timestamped):
    """Related-items response entry (bookkeeping fields stripped)."""

    id: str
    slug: str = ""
    name: str = ""
    description: Optional[str] = None
    repo_owner: str = ""
    repo_name: str = ""
    stars: int = 0
    forks: int = 0
    trending_score: float = 0.0
    updated_at: Optional[datetime] = None
    categories: List[str] = Field(default_factory=list)


def ensure_items(items: List[Union[Dict[str, Any], "Item"]]) -> List["Item"]:
    """Convert list of dicts or Items to list of Item models."""
    return [
        Item.model_validate(i) if isinstance(i, dict) else i
        for i in items
    ]

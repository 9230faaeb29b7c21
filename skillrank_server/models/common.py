"""Common Pydantic models shared across routes."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from skillrank import RelatedItem


class ItemCard(BaseModel):
    id: str
    slug: str = ""
    name: str = ""
    description: Optional[str] = None
    repo_owner: str = ""
    repo_name: str = ""
    source_type: str = "github"
    stars: int = 0
    forks: int = 0
    trending_score: float = 0.0
    last_commit_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    indexed_at: Optional[datetime] = None
    tier: Optional[str] = None
    categories: List[str] = []
    tags: List[str] = []


class ItemListResponse(BaseModel):
    items: List[ItemCard]
    total: int
    offset: int
    limit: Optional[int] = None


class RelatedItemsResponse(BaseModel):
    item_id: str
    related: List[RelatedItem]
    cached: bool = False

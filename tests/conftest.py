"""Shared fixtures: fixed clock, item factory, in-memory stores."""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from skillrank import Item
from skillrank_server.services import InMemoryCatalogStore, InMemoryScratchStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for TTL stores and the access recorder."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def make_item(item_id: str, **fields) -> Item:
    data = {
        "id": item_id,
        "slug": f"owner/{item_id}",
        "name": item_id,
        "repo_owner": "owner-" + item_id,
        "repo_name": item_id,
        "last_commit_at": NOW - timedelta(days=10),
    }
    data.update(fields)
    return Item.model_validate(data)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scratch(clock) -> InMemoryScratchStore:
    return InMemoryScratchStore(clock=clock)


@pytest.fixture
def catalog_items() -> List[Item]:
    return [
        make_item("source", categories=["docs", "pdf"], tags=["extract", "ocr"], repo_owner="acme",
                  stars=50, trending_score=5),
        make_item("cat-both", categories=["docs", "pdf"], stars=10, trending_score=1),
        make_item("cat-one", categories=["docs"], tags=["ocr"], stars=200, trending_score=3),
        make_item("tag-only", tags=["extract"], stars=5, trending_score=2),
        make_item("same-author", repo_owner="acme", stars=1, trending_score=0.5),
        make_item("trending", stars=9000, trending_score=40),
        make_item("hidden", categories=["docs", "pdf"], tags=["extract"], visibility="private",
                  trending_score=99),
    ]


@pytest.fixture
def catalog(catalog_items) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(catalog_items)

"""
Related Items Pipeline Tests

get_related_items runs discovery, batch overlap enrichment and ranking, then
truncates to limit, attaches categories and strips bookkeeping fields.

Fixture catalog (conftest): source has categories docs+pdf, tags extract+ocr,
owner acme.

Run:
----
    pytest tests/test_related.py -v
"""

import asyncio
from datetime import timedelta

import pytest

from skillrank import DiscoveryTier, RelatedItem, get_related_items, rank_related
from skillrank_server.services import InMemoryCatalogStore

from .conftest import NOW, make_item

SOURCE_CATEGORIES = ["docs", "pdf"]


class OverlapRecordingCatalog(InMemoryCatalogStore):
    def __init__(self, items):
        super().__init__(items)
        self.overlap_calls = []

    async def batch_count_overlap(self, item_ids, values, kind):
        self.overlap_calls.append((kind, list(item_ids)))
        return await super().batch_count_overlap(item_ids, values, kind)


def _related(gateway, item_id="source", categories=SOURCE_CATEGORIES, owner="acme", limit=10):
    return asyncio.run(get_related_items(gateway, item_id, categories, owner, limit=limit, now=NOW))


class TestGetRelatedItems:
    def test_full_ranking(self, catalog):
        related = _related(catalog)
        assert [r.id for r in related] == [
            "cat-both", "cat-one", "tag-only", "same-author", "trending",
        ]

    def test_truncates_to_limit(self, catalog):
        related = _related(catalog, limit=2)
        assert [r.id for r in related] == ["cat-both", "cat-one"]

    def test_categories_attached(self, catalog):
        related = _related(catalog, limit=2)
        assert related[0].categories == ["docs", "pdf"]
        assert related[1].categories == ["docs"]

    def test_bookkeeping_fields_stripped(self, catalog):
        related = _related(catalog, limit=3)
        assert all(isinstance(r, RelatedItem) for r in related)
        dumped = related[0].model_dump()
        for field in ("shared_count", "discovery_tier", "final_score", "tier", "tags"):
            assert field not in dumped
        assert dumped["slug"] == "owner/cat-both"

    def test_item_without_signals_still_gets_results(self, catalog):
        related = _related(catalog, item_id="trending", categories=[], owner=None)
        assert related
        assert "trending" not in {r.id for r in related}
        assert "hidden" not in {r.id for r in related}

    def test_only_item_in_catalog_gets_empty_list(self):
        gateway = InMemoryCatalogStore([{"id": "alone", "categories": ["x"]}])
        assert _related(gateway, item_id="alone", categories=["x"], owner=None) == []


class TestRankRelated:
    def test_limit_is_clamped_to_one(self, catalog):
        top = asyncio.run(rank_related(catalog, "source", SOURCE_CATEGORIES, "acme", limit=0, now=NOW))
        assert [s.candidate.id for s in top] == ["cat-both"]

    def test_scores_are_descending(self, catalog):
        top = asyncio.run(rank_related(catalog, "source", SOURCE_CATEGORIES, "acme", now=NOW))
        scores = [s.final_score for s in top]
        assert scores == sorted(scores, reverse=True)

    def test_batch_overlap_skips_category_counts_for_tier_one(self, catalog_items):
        gateway = OverlapRecordingCatalog(catalog_items)
        asyncio.run(rank_related(gateway, "source", SOURCE_CATEGORIES, "acme", limit=2, now=NOW))
        calls = dict(gateway.overlap_calls)
        assert calls["tags"] == ["cat-both", "cat-one", "tag-only", "same-author"]
        assert calls["categories"] == ["tag-only", "same-author"]

    def test_no_overlap_queries_without_source_signals(self, catalog_items):
        gateway = OverlapRecordingCatalog(catalog_items)
        asyncio.run(rank_related(gateway, "trending", [], None, now=NOW))
        assert gateway.overlap_calls == []


class TestCategoryVersusTrending:
    """
    Source A: categories x+y, no tags. B shares only x (0 stars, committed
    10 days ago). C shares nothing but is the top trending item (100k stars,
    trending 90, committed today). Only B and C exist besides A.
    """

    @pytest.fixture
    def gateway(self):
        return InMemoryCatalogStore([
            make_item("A", categories=["x", "y"]),
            make_item("B", categories=["x"], stars=0, last_commit_at=NOW - timedelta(days=10)),
            make_item("C", stars=100_000, trending_score=90, last_commit_at=NOW),
        ])

    def test_partial_category_match_beats_trending(self, gateway):
        top = asyncio.run(rank_related(gateway, "A", ["x", "y"], "owner-A", limit=1, now=NOW))
        assert [s.candidate.id for s in top] == ["B"]
        # 50*.40 + 0*.10 + 0*.20 + 95*.15 + 100*.15
        assert top[0].final_score == pytest.approx(49.25)

    def test_trending_found_by_fallback_pass(self, gateway):
        ranked = asyncio.run(rank_related(gateway, "A", ["x", "y"], "owner-A", limit=10, now=NOW))
        assert [(s.candidate.id, s.candidate.discovery_tier) for s in ranked] == [
            ("B", DiscoveryTier.CATEGORY),
            ("C", DiscoveryTier.TRENDING),
        ]
        # 0*.40 + 0*.10 + 100*.20 + 100*.15 + 0*.15
        assert ranked[1].final_score == pytest.approx(35.0)
        assert ranked[0].category_score == pytest.approx(50.0)

    def test_related_items_returns_b_only(self, gateway):
        related = asyncio.run(get_related_items(gateway, "A", ["x", "y"], "owner-A", limit=1, now=NOW))
        assert [r.id for r in related] == ["B"]
        assert related[0].categories == ["x"]

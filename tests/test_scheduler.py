"""
Tier Scheduler Tests

needs_update(tier, next_update_at, last_accessed_at, now):
- absent or past next_update_at forces a refresh for every active tier
- hot/warm/cool never refresh while the schedule is in the future
- cold also refreshes on stale (or missing) last access, even with a future schedule
- archived never refreshes here; missing tier behaves as cold

Run:
----
    pytest tests/test_scheduler.py -v
"""

from datetime import timedelta

import pytest

from skillrank import Tier, needs_update, tier_policy

from .conftest import NOW

SCHEDULED_TIERS = [Tier.HOT, Tier.WARM, Tier.COOL]


class TestOverdueSchedule:
    @pytest.mark.parametrize("tier", SCHEDULED_TIERS + [Tier.COLD])
    def test_missing_next_update_forces_refresh(self, tier):
        assert needs_update(tier, None, NOW, NOW) is True

    @pytest.mark.parametrize("tier", SCHEDULED_TIERS + [Tier.COLD])
    def test_past_next_update_forces_refresh(self, tier):
        assert needs_update(tier, NOW - timedelta(seconds=1), NOW, NOW) is True

    def test_next_update_equal_to_now_is_not_overdue(self):
        assert needs_update(Tier.HOT, NOW, NOW, NOW) is False


class TestScheduledTiers:
    @pytest.mark.parametrize("tier", SCHEDULED_TIERS)
    def test_future_schedule_never_flips(self, tier):
        next_update = NOW + timedelta(days=400)
        for days in (0, 1, 30, 200, 399):
            now = NOW + timedelta(days=days)
            # Even a long-unaccessed item waits for its schedule
            assert needs_update(tier, next_update, None, now) is False
            assert needs_update(tier, next_update, NOW - timedelta(days=1000), now) is False


class TestColdTier:
    def test_stale_access_refreshes_despite_future_schedule(self):
        cold_interval = tier_policy(Tier.COLD).update_interval
        last_access = NOW - cold_interval - timedelta(seconds=1)
        assert needs_update(Tier.COLD, NOW + timedelta(days=5), last_access, NOW) is True

    def test_recent_access_with_future_schedule_is_fresh(self):
        assert needs_update(Tier.COLD, NOW + timedelta(days=5), NOW - timedelta(days=29), NOW) is False

    def test_exactly_interval_old_is_not_stale(self):
        cold_interval = tier_policy(Tier.COLD).update_interval
        assert needs_update(Tier.COLD, NOW + timedelta(days=5), NOW - cold_interval, NOW) is False

    def test_never_accessed_refreshes(self):
        assert needs_update(Tier.COLD, NOW + timedelta(days=5), None, NOW) is True

    def test_missing_tier_behaves_as_cold(self):
        assert needs_update(None, NOW + timedelta(days=5), None, NOW) is True
        assert needs_update(None, NOW + timedelta(days=5), NOW, NOW) is False


class TestArchived:
    def test_archived_never_refreshes(self):
        assert needs_update(Tier.ARCHIVED, None, None, NOW) is False
        assert needs_update(Tier.ARCHIVED, NOW - timedelta(days=1), None, NOW) is False


class TestTierPolicy:
    def test_intervals(self):
        assert tier_policy(Tier.HOT).update_interval == timedelta(hours=6)
        assert tier_policy(Tier.WARM).update_interval == timedelta(hours=24)
        assert tier_policy(Tier.COOL).update_interval == timedelta(days=7)
        assert tier_policy(Tier.COLD).update_interval == timedelta(days=30)
        assert tier_policy(Tier.ARCHIVED).update_interval == timedelta(0)
        assert tier_policy(Tier.ARCHIVED).access_window == timedelta(0)

    def test_every_tier_has_a_policy(self):
        for tier in Tier:
            assert tier_policy(tier) is not None

    def test_parse_unknown_and_missing(self):
        assert Tier.parse("frozen") is Tier.COLD
        assert Tier.parse(None) is Tier.COLD
        assert Tier.parse("") is Tier.COLD
        assert Tier.parse(" HOT ") is Tier.HOT
        assert tier_policy(None) == tier_policy(Tier.COLD)

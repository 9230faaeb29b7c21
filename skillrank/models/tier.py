"""
Freshness tiers: closed enum plus the static per-tier refresh policy.

Tier controls refresh cadence:
- hot/warm/cool: refreshed on a schedule (next_update_at, set by the tier sweep)
- cold: additionally refreshed on access once the last access is older than its interval
- archived: never refreshed proactively; resurrected on demand only

The policy table is resolved by tier_policy(), which branches over every member
so a new tier without a policy fails loudly instead of falling back silently.
"""

import logging
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    """Freshness classification of a cataloged item."""

    HOT = "hot"
    WARM = "warm"
    COOL = "cool"
    COLD = "cold"
    ARCHIVED = "archived"

    @classmethod
    def parse(cls, value: Union["Tier", str, None]) -> "Tier":
        """
        Tier from a stored value. Missing or unrecognised values map to COLD,
        the least frequently refreshed active tier.
        """
        if isinstance(value, Tier):
            return value
        if value is None or not str(value).strip():
            return cls.COLD
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("[tier] UNKNOWN_TIER value=%r defaulting=cold", value)
            return cls.COLD


class TierPolicy(BaseModel):
    """How long a refresh stays valid and how long access history counts."""

    model_config = ConfigDict(frozen=True)

    update_interval: timedelta
    access_window: timedelta


HOT_POLICY = TierPolicy(update_interval=timedelta(hours=6), access_window=timedelta(days=7))
WARM_POLICY = TierPolicy(update_interval=timedelta(hours=24), access_window=timedelta(days=30))
COOL_POLICY = TierPolicy(update_interval=timedelta(days=7), access_window=timedelta(days=90))
# Cold items are refreshed on access once older than this interval
COLD_POLICY = TierPolicy(update_interval=timedelta(days=30), access_window=timedelta(days=365))
ARCHIVED_POLICY = TierPolicy(update_interval=timedelta(0), access_window=timedelta(0))


def tier_policy(tier: Optional[Tier]) -> TierPolicy:
    """Policy row for a tier (None is treated as cold)."""
    tier = Tier.parse(tier)
    if tier is Tier.HOT:
        return HOT_POLICY
    if tier is Tier.WARM:
        return WARM_POLICY
    if tier is Tier.COOL:
        return COOL_POLICY
    if tier is Tier.COLD:
        return COLD_POLICY
    if tier is Tier.ARCHIVED:
        return ARCHIVED_POLICY
    raise ValueError(f"No policy defined for tier {tier!r}")

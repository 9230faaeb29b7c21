"""
Tier scheduler: decides whether an item's cached metadata is due for a refresh.

hot/warm/cool are refreshed on the schedule the tier sweep writes into
next_update_at. cold additionally refreshes on access once the previous access
is older than the cold update interval. archived is never refreshed here.
"""

from datetime import datetime
from typing import Optional

from ..models.tier import Tier, tier_policy


def needs_update(
    tier: Optional[Tier],
    next_update_at: Optional[datetime],
    last_accessed_at: Optional[datetime],
    now: datetime,
) -> bool:
    """
    True if the item should be queued for refresh.

    An absent or past next_update_at always wins. For cold items a stale (or
    missing) last access is an independent trigger, even with a future schedule.
    """
    tier = Tier.parse(tier)
    if tier is Tier.ARCHIVED:
        return False
    if next_update_at is None or next_update_at < now:
        return True
    if tier is Tier.COLD:
        if last_accessed_at is None:
            return True
        return now - last_accessed_at > tier_policy(Tier.COLD).update_interval
    return False

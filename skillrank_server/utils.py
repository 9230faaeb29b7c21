"""Pure helpers: access tracking gate, client keys, item card formatting."""

import re
from typing import Mapping, Optional

from skillrank import Item

from .models import ItemCard

# Related list size (used by routes/items)
DEFAULT_RELATED_LIMIT = 10
MAX_RELATED_LIMIT = 50

BOT_UA_PATTERN = re.compile(r"\b(bot|crawler|spider|slurp|preview|headless|lighthouse)\b", re.IGNORECASE)

# Client key keeps only this much of the user agent
UA_KEY_LENGTH = 64


def _header(headers: Mapping[str, str], name: str) -> str:
    return headers.get(name) or headers.get(name.lower()) or ""


def should_track_access(headers: Mapping[str, str]) -> bool:
    """False for prefetches, missing user agents, and crawlers."""
    purpose = f"{_header(headers, 'Purpose')} {_header(headers, 'Sec-Purpose')}".lower()
    if "prefetch" in purpose:
        return False
    ua = _header(headers, "User-Agent").strip()
    if not ua:
        return False
    return BOT_UA_PATTERN.search(ua) is None


def access_client_key(headers: Mapping[str, str], user_id: Optional[str] = None) -> Optional[str]:
    """
    Dedup key for the viewer: user id when signed in, else IP (+ truncated UA),
    else UA alone. None when nothing identifies the client.
    """
    if user_id:
        return f"user:{user_id}"

    ua = _header(headers, "User-Agent")[:UA_KEY_LENGTH]
    cf_ip = _header(headers, "CF-Connecting-IP").strip()
    if cf_ip:
        return f"ipua:{cf_ip}:{ua}" if ua else f"ip:{cf_ip}"

    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return f"ipua:{first}:{ua}" if ua else f"ip:{first}"

    return f"ua:{ua}" if ua else None


def to_item_card(item: Item) -> ItemCard:
    """Public item shape (lifecycle counters and schedule omitted)."""
    return ItemCard(
        id=item.id,
        slug=item.slug,
        name=item.name,
        description=item.description,
        repo_owner=item.repo_owner,
        repo_name=item.repo_name,
        source_type=item.source_type,
        stars=item.stars,
        forks=item.forks,
        trending_score=item.trending_score,
        last_commit_at=item.last_commit_at,
        updated_at=item.updated_at,
        indexed_at=item.indexed_at,
        tier=item.tier.value if item.tier is not None else None,
        categories=list(item.categories),
        tags=list(item.tags),
    )

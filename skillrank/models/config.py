"""
Engine configuration: lifecycle windows, discovery caps, and ranking parameters.

EngineConfig defaults are defined here. The server may pass a dict
(e.g. from ENGINE_CONFIG_PATH JSON); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class SignalWeights(BaseModel):
    """One row of the adaptive weight table (must sum to 1.0)."""

    model_config = ConfigDict(frozen=True)

    category: float
    tag: float
    author: float
    popularity: float
    freshness: float
    discovery: float

    @property
    def total(self) -> float:
        return (
            self.category + self.tag + self.author
            + self.popularity + self.freshness + self.discovery
        )

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        if abs(self.total - 1.0) > 1e-9:
            raise ValueError(f"Signal weights must sum to 1.0, got {self.total}")
        return self


class EngineConfig(BaseModel):
    """Configuration for the lifecycle and related-items engine."""

    # -------------------------------------------------------------------------
    # Access recording
    # -------------------------------------------------------------------------

    # Repeat views by the same client within this window do not touch counters.
    access_dedup_window_seconds: int = 30 * 60
    # Access dedup map is pruned of expired entries once it grows past this.
    access_dedup_max_entries: int = 10_000

    # A needs_update marker is written at most once per item in this window.
    marker_debounce_window_seconds: int = 15 * 60
    marker_debounce_max_entries: int = 5_000

    # -------------------------------------------------------------------------
    # Scratch store markers
    # -------------------------------------------------------------------------

    needs_update_ttl_seconds: int = 60 * 60
    resurrection_marker_ttl_seconds: int = 24 * 60 * 60

    # -------------------------------------------------------------------------
    # Candidate discovery (Stage A): per-pass row caps
    # Pool target is 2 * limit; later passes run only while below it.
    # -------------------------------------------------------------------------

    category_pass_limit: int = 30
    tag_pass_limit: int = 20
    author_pass_limit: int = 10
    trending_pass_limit: int = 15

    # -------------------------------------------------------------------------
    # Relevance scoring (Stage B)
    # -------------------------------------------------------------------------

    # Score awarded by the pass that discovered a candidate (tiers 1-4).
    discovery_score_category: float = 100.0
    discovery_score_tag: float = 67.0
    discovery_score_author: float = 33.0
    discovery_score_trending: float = 0.0

    # popularity = min(cap, log10(stars + 1) * star_factor + trending * trending_factor)
    popularity_star_factor: float = 20.0
    popularity_trending_factor: float = 2.0
    popularity_cap: float = 100.0

    # freshness = max(0, 100 - days_since_commit * decay); unknown commit = default days ago
    freshness_decay_per_day: float = 0.5
    freshness_default_days: float = 200.0

    # Adaptive weight rows, chosen by which signals the source item has.
    weights_categories_and_tags: SignalWeights = SignalWeights(
        category=0.30, tag=0.20, author=0.10, popularity=0.15, freshness=0.10, discovery=0.15,
    )
    weights_categories_only: SignalWeights = SignalWeights(
        category=0.40, tag=0.0, author=0.10, popularity=0.20, freshness=0.15, discovery=0.15,
    )
    weights_tags_only: SignalWeights = SignalWeights(
        category=0.0, tag=0.40, author=0.10, popularity=0.20, freshness=0.15, discovery=0.15,
    )
    weights_no_signals: SignalWeights = SignalWeights(
        category=0.0, tag=0.0, author=0.20, popularity=0.35, freshness=0.20, discovery=0.25,
    )

    @model_validator(mode="after")
    def windows_positive(self):
        if self.access_dedup_window_seconds <= 0 or self.marker_debounce_window_seconds <= 0:
            raise ValueError("Dedup windows must be positive")
        if self.access_dedup_max_entries <= 0 or self.marker_debounce_max_entries <= 0:
            raise ValueError("Dedup max entries must be positive")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "EngineConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "access" in config_dict:
            ac = config_dict["access"]
            if "dedup_window_seconds" in ac:
                flat["access_dedup_window_seconds"] = ac["dedup_window_seconds"]
            if "dedup_max_entries" in ac:
                flat["access_dedup_max_entries"] = ac["dedup_max_entries"]
            if "marker_debounce_window_seconds" in ac:
                flat["marker_debounce_window_seconds"] = ac["marker_debounce_window_seconds"]
            if "marker_debounce_max_entries" in ac:
                flat["marker_debounce_max_entries"] = ac["marker_debounce_max_entries"]
        if "markers" in config_dict:
            mk = config_dict["markers"]
            if "needs_update_ttl_seconds" in mk:
                flat["needs_update_ttl_seconds"] = mk["needs_update_ttl_seconds"]
            if "resurrection_ttl_seconds" in mk:
                flat["resurrection_marker_ttl_seconds"] = mk["resurrection_ttl_seconds"]
        if "discovery" in config_dict:
            for key, value in config_dict["discovery"].items():
                flat[f"{key}_pass_limit"] = value
        if "scoring" in config_dict:
            flat.update(config_dict["scoring"])
        if "weights" in config_dict:
            for row, values in config_dict["weights"].items():
                flat[f"weights_{row}"] = values
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = EngineConfig()


def resolve_config(config: Optional["EngineConfig"]) -> "EngineConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG

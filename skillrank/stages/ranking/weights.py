"""
Adaptive weight selection.

The source item's own signals pick the weight row: with categories and/or tags
the overlap scores dominate; with neither, popularity, discovery tier and
freshness carry the ranking.
"""

from ...models.config import EngineConfig, SignalWeights


def select_weights(
    has_categories: bool,
    has_tags: bool,
    config: EngineConfig,
) -> SignalWeights:
    """Weight row for the signals the source item actually has."""
    if has_categories and has_tags:
        return config.weights_categories_and_tags
    if has_categories:
        return config.weights_categories_only
    if has_tags:
        return config.weights_tags_only
    return config.weights_no_signals

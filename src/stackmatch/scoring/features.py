"""Extract comparable attribute sets from tool descriptors."""

from __future__ import annotations

from stackmatch.models import FeatureSets, ToolDescriptor
from stackmatch.scoring.similarity import normalize_to_set


def extract_features(tool: ToolDescriptor) -> FeatureSets:
    """Derive the six normalized sets the scorer compares."""
    return FeatureSets(
        categories=normalize_to_set(tool.category),
        integrations=normalize_to_set(tool.integrations),
        verified_integrations=normalize_to_set(tool.verified_integrations),
        frameworks=normalize_to_set(tool.frameworks),
        languages=normalize_to_set(tool.languages),
        known_limitations=normalize_to_set(tool.known_limitations),
    )


class FeatureCache:
    """Memoize FeatureSets per tool id for the duration of one request or job.

    Every tool is compared against every other one, so without the cache
    each descriptor would be normalized ``n - 1`` times per pass.
    """

    def __init__(self) -> None:
        self._features: dict[str, FeatureSets] = {}

    def get(self, tool: ToolDescriptor) -> FeatureSets:
        cached = self._features.get(tool.id)
        if cached is None:
            cached = extract_features(tool)
            self._features[tool.id] = cached
        return cached

    def __len__(self) -> int:
        return len(self._features)

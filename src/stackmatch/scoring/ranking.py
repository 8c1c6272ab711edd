"""Popularity-adjusted ordering of pairwise compatibility scores."""

from __future__ import annotations

import math
from collections.abc import Sequence

from stackmatch.models import PairScore, ToolDescriptor
from stackmatch.scoring.features import FeatureCache
from stackmatch.scoring.scorer import SCORE_PRECISION, score_features

POPULARITY_WEIGHT = 0.2


def _popularity(value: float | None) -> float:
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, min(1.0, number))


def rank_of(
    score: float,
    subject_popularity: float | None,
    other_popularity: float | None,
) -> float:
    """Scale ``score`` up by at most 20% according to average popularity.

    Only used for ordering; the stored compatibility score stays ``score``.
    """
    avg = (_popularity(subject_popularity) + _popularity(other_popularity)) / 2
    return round(score * (1 + avg * POPULARITY_WEIGHT), SCORE_PRECISION)


def rank_candidates(
    subject: ToolDescriptor,
    tools: Sequence[ToolDescriptor],
    cache: FeatureCache | None = None,
) -> list[PairScore]:
    """Score ``subject`` against every other tool, best rank score first.

    The subject itself is skipped. Ties keep registry order (stable sort).
    """
    if cache is None:
        cache = FeatureCache()
    subject_features = cache.get(subject)
    scored: list[PairScore] = []
    for other in tools:
        if other.id == subject.id:
            continue
        score = score_features(subject_features, cache.get(other))
        scored.append(
            PairScore(
                subject_id=subject.id,
                other_id=other.id,
                name=other.name,
                score=score,
                rank_score=rank_of(score, subject.popularity_score, other.popularity_score),
            )
        )
    scored.sort(key=lambda pair: pair.rank_score, reverse=True)
    return scored

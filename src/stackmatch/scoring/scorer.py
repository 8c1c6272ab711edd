"""Weighted set-overlap compatibility score between two tools."""

from __future__ import annotations

import math

from stackmatch.models import CompatibilityBreakdown, Difficulty, FeatureSets, ToolDescriptor
from stackmatch.scoring.features import extract_features
from stackmatch.scoring.similarity import overlap_ratio

# Hand-tuned heuristic weights. Integration overlap is the strongest signal,
# shared known limitations count against the pairing.
INTEGRATION_WEIGHT = 0.55
CATEGORY_WEIGHT = 0.20
VERIFIED_WEIGHT = 0.10
FRAMEWORK_WEIGHT = 0.10
LANGUAGE_WEIGHT = 0.05
LIMITATION_WEIGHT = 0.20
CATEGORY_BOOST = 0.05

SCORE_MIN = 0.0
SCORE_MAX = 1.0
SCORE_PRECISION = 3

# Difficulty tiers (lower bound, inclusive)
EASY_THRESHOLD = 0.75
MEDIUM_THRESHOLD = 0.55


def _overlap_if_both(a: frozenset[str], b: frozenset[str]) -> float:
    """Overlap ratio, or 0.0 when either side has no labels (no signal)."""
    if not a or not b:
        return 0.0
    return overlap_ratio(a, b)


def _combine(
    integration: float,
    category: float,
    verified: float,
    framework: float,
    language: float,
    limitation: float,
    boost: float,
) -> float:
    score = (
        INTEGRATION_WEIGHT * integration
        + CATEGORY_WEIGHT * category
        + VERIFIED_WEIGHT * verified
        + FRAMEWORK_WEIGHT * framework
        + LANGUAGE_WEIGHT * language
        - LIMITATION_WEIGHT * limitation
        + boost
    )
    if not math.isfinite(score):
        score = 0.0
    score = max(SCORE_MIN, min(SCORE_MAX, score))
    return round(score, SCORE_PRECISION)


def score_features(a: FeatureSets, b: FeatureSets) -> float:
    """Compute the compatibility score of two pre-extracted feature sets.

    Scoring components:
    - integration overlap: 0.55
    - category overlap: 0.20
    - verified integration overlap: 0.10 (only when both sides have some)
    - framework overlap: 0.10 (only when both sides have some)
    - language overlap: 0.05 (only when both sides have some)
    - shared known limitations: -0.20 (only when both sides have some)
    - any shared category: +0.05

    The result is clamped to [0, 1] and rounded to 3 decimals.
    """
    boost = CATEGORY_BOOST if a.categories & b.categories else 0.0
    return _combine(
        overlap_ratio(a.integrations, b.integrations),
        overlap_ratio(a.categories, b.categories),
        _overlap_if_both(a.verified_integrations, b.verified_integrations),
        _overlap_if_both(a.frameworks, b.frameworks),
        _overlap_if_both(a.languages, b.languages),
        _overlap_if_both(a.known_limitations, b.known_limitations),
        boost,
    )


def score_compatibility(subject: ToolDescriptor, other: ToolDescriptor) -> float:
    """Compatibility score in [0, 1] for two tool descriptors."""
    return score_features(extract_features(subject), extract_features(other))


def classify_difficulty(score: float) -> Difficulty:
    """Map a compatibility score to an integration difficulty tier."""
    if score >= EASY_THRESHOLD:
        return Difficulty.EASY
    if score >= MEDIUM_THRESHOLD:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def explain_compatibility(
    subject: ToolDescriptor,
    other: ToolDescriptor,
) -> CompatibilityBreakdown:
    """Break a pairwise score down into its factors, shared labels and notes."""
    a = extract_features(subject)
    b = extract_features(other)

    integration = overlap_ratio(a.integrations, b.integrations)
    category = overlap_ratio(a.categories, b.categories)
    verified = _overlap_if_both(a.verified_integrations, b.verified_integrations)
    framework = _overlap_if_both(a.frameworks, b.frameworks)
    language = _overlap_if_both(a.languages, b.languages)
    limitation = _overlap_if_both(a.known_limitations, b.known_limitations)

    shared_categories = sorted(a.categories & b.categories)
    boost = CATEGORY_BOOST if shared_categories else 0.0
    score = _combine(integration, category, verified, framework, language, limitation, boost)

    shared_integrations = sorted(a.integrations & b.integrations)
    shared_frameworks = sorted(a.frameworks & b.frameworks)
    shared_languages = sorted(a.languages & b.languages)
    shared_limitations = sorted(a.known_limitations & b.known_limitations)

    notes: list[str] = []
    if shared_categories:
        notes.append("Category synergy")
    if shared_integrations:
        notes.append(f"Shared integrations: {', '.join(shared_integrations)}")
    if verified > 0:
        notes.append("Overlapping verified integrations")
    if shared_frameworks:
        notes.append(f"Common frameworks: {', '.join(shared_frameworks)}")
    if shared_languages:
        notes.append(f"Common languages: {', '.join(shared_languages)}")
    if shared_limitations:
        notes.append(f"Shared limitations: {', '.join(shared_limitations)}")

    setup_steps: list[str] = []
    if shared_integrations:
        setup_steps.append(f"Configure integration for {subject.name} + {other.name}")

    return CompatibilityBreakdown(
        subject_id=subject.id,
        other_id=other.id,
        integration_score=round(integration, SCORE_PRECISION),
        category_score=round(category, SCORE_PRECISION),
        verified_score=round(verified, SCORE_PRECISION),
        framework_score=round(framework, SCORE_PRECISION),
        language_score=round(language, SCORE_PRECISION),
        limitation_penalty=round(limitation, SCORE_PRECISION),
        category_boost=boost,
        score=score,
        difficulty=classify_difficulty(score),
        shared_categories=shared_categories,
        shared_integrations=shared_integrations,
        shared_frameworks=shared_frameworks,
        shared_languages=shared_languages,
        shared_limitations=shared_limitations,
        notes=notes,
        setup_steps=setup_steps,
    )

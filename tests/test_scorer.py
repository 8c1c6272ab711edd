"""Tests for the pairwise compatibility scorer (scoring/scorer.py)."""

from __future__ import annotations

import random

import pytest

from stackmatch.models import Difficulty, ToolDescriptor
from stackmatch.scoring.scorer import (
    CATEGORY_BOOST,
    CATEGORY_WEIGHT,
    INTEGRATION_WEIGHT,
    LIMITATION_WEIGHT,
    _combine,
    classify_difficulty,
    explain_compatibility,
    score_compatibility,
)

# --- Helpers ---------------------------------------------------------------

_LABELS = {
    "category": ["ide", "hosting", "database", "agentic tool", "cloud ide"],
    "integrations": ["github", "vercel", "netlify", "gitlab", "slack", "stripe"],
    "verified_integrations": ["github", "vercel", "netlify"],
    "frameworks": ["react", "next.js", "svelte", "django"],
    "languages": ["python", "typescript", "go", "rust"],
    "known_limitations": ["vendor lock-in", "requires internet", "resource intensive"],
}


def _tool(tool_id: str = "t", **fields: object) -> ToolDescriptor:
    return ToolDescriptor(id=tool_id, name=tool_id.title(), **fields)


def _random_tool(rng: random.Random, tool_id: str) -> ToolDescriptor:
    fields = {
        key: rng.sample(labels, rng.randint(0, len(labels))) for key, labels in _LABELS.items()
    }
    # Random casing and padding must not matter
    fields["integrations"] = [
        f" {label.upper()} " if rng.random() < 0.3 else label for label in fields["integrations"]
    ]
    return _tool(tool_id, popularity_score=rng.random(), **fields)


def _random_pairs(count: int, seed: int = 7) -> list[tuple[ToolDescriptor, ToolDescriptor]]:
    rng = random.Random(seed)
    return [(_random_tool(rng, f"a{i}"), _random_tool(rng, f"b{i}")) for i in range(count)]


# === Scenarios ==============================================================


class TestScenarios:
    def test_partial_integration_same_category(self) -> None:
        a = _tool("a", integrations=["github", "vercel"], category=["ide"])
        b = _tool("b", integrations=["github"], category=["ide"])

        # 0.55 * 0.5 + 0.20 * 1.0 + 0.05
        assert score_compatibility(a, b) == 0.525

    def test_nothing_shared_scores_zero(self) -> None:
        a = _tool("a", integrations=["github"], category=["ide"], frameworks=["react"])
        b = _tool("b", integrations=["slack"], category=["hosting"], frameworks=["django"])

        assert score_compatibility(a, b) == 0.0

    def test_degenerate_descriptors_score_zero(self) -> None:
        assert score_compatibility(_tool("a"), _tool("b")) == 0.0

    def test_everything_shared_clamps_to_one(self) -> None:
        fields = {key: labels[:2] for key, labels in _LABELS.items() if key != "known_limitations"}
        a = _tool("a", **fields)
        b = _tool("b", **fields)

        # 0.55 + 0.20 + 0.10 + 0.10 + 0.05 + 0.05 boost = 1.05
        assert score_compatibility(a, b) == 1.0

    def test_only_shared_limitations_clamps_to_zero(self) -> None:
        a = _tool("a", known_limitations=["vendor lock-in"])
        b = _tool("b", known_limitations=["vendor lock-in"])

        assert score_compatibility(a, b) == 0.0

    def test_case_and_duplicates_do_not_matter(self) -> None:
        a = _tool("a", integrations=["GitHub", "github ", " GITHUB"])
        b = _tool("b", integrations=["github"])

        assert score_compatibility(a, b) == INTEGRATION_WEIGHT

    def test_rounded_to_three_decimals(self) -> None:
        a = _tool("a", integrations=["x", "y", "z"])
        b = _tool("b", integrations=["x"])

        # 0.55 / 3 = 0.18333...
        assert score_compatibility(a, b) == 0.183


# === Properties =============================================================


class TestProperties:
    @pytest.mark.parametrize(("a", "b"), _random_pairs(150))
    def test_symmetric(self, a: ToolDescriptor, b: ToolDescriptor) -> None:
        assert score_compatibility(a, b) == score_compatibility(b, a)

    @pytest.mark.parametrize(("a", "b"), _random_pairs(150, seed=11))
    def test_within_unit_range(self, a: ToolDescriptor, b: ToolDescriptor) -> None:
        assert 0.0 <= score_compatibility(a, b) <= 1.0

    def test_empty_frameworks_on_both_sides_contribute_nothing(self) -> None:
        a = _tool("a", integrations=["github"])
        b = _tool("b", integrations=["github"])

        breakdown = explain_compatibility(a, b)

        assert breakdown.framework_score == 0.0
        assert breakdown.score == INTEGRATION_WEIGHT

    def test_empty_frameworks_on_one_side_contribute_nothing(self) -> None:
        a = _tool("a", integrations=["github"], frameworks=["react"])
        b = _tool("b", integrations=["github"])

        assert score_compatibility(a, b) == INTEGRATION_WEIGHT

    def test_shared_category_adds_boost_on_top_of_overlap(self) -> None:
        base = {"integrations": ["github"]}
        shared = score_compatibility(
            _tool("a", category=["ide"], **base), _tool("b", category=["ide"], **base)
        )
        disjoint = score_compatibility(
            _tool("a", category=["ide"], **base), _tool("b", category=["hosting"], **base)
        )

        assert shared > disjoint
        # The proportional category term accounts for 0.20 * 1.0; the rest is the boost
        assert shared - disjoint - CATEGORY_WEIGHT * 1.0 == pytest.approx(CATEGORY_BOOST)

    def test_more_shared_limitations_never_increase_score(self) -> None:
        subject = _tool(
            "a",
            integrations=["github", "vercel"],
            known_limitations=["l1", "l2", "l3"],
        )
        scores = [
            score_compatibility(
                subject,
                _tool("b", integrations=["github", "vercel"], known_limitations=shared),
            )
            for shared in ([], ["l1"], ["l1", "l2"], ["l1", "l2", "l3"])
        ]

        assert scores == sorted(scores, reverse=True)
        assert scores[0] == INTEGRATION_WEIGHT
        assert scores[-1] == pytest.approx(INTEGRATION_WEIGHT - LIMITATION_WEIGHT)

    def test_non_finite_sum_is_treated_as_zero(self) -> None:
        assert _combine(float("nan"), 0, 0, 0, 0, 0, 0) == 0.0
        assert _combine(float("inf"), 0, 0, 0, 0, float("inf"), 0) == 0.0


# === Difficulty =============================================================


class TestClassifyDifficulty:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (1.0, Difficulty.EASY),
            (0.75, Difficulty.EASY),
            (0.749, Difficulty.MEDIUM),
            (0.55, Difficulty.MEDIUM),
            (0.549, Difficulty.HARD),
            (0.0, Difficulty.HARD),
        ],
    )
    def test_thresholds(self, score: float, expected: Difficulty) -> None:
        assert classify_difficulty(score) is expected


# === Breakdown ==============================================================


class TestExplainCompatibility:
    def test_breakdown_matches_score(self) -> None:
        a = _tool("a", integrations=["github", "vercel"], category=["ide"])
        b = _tool("b", integrations=["GitHub"], category=["IDE"])

        breakdown = explain_compatibility(a, b)

        assert breakdown.subject_id == "a"
        assert breakdown.other_id == "b"
        assert breakdown.integration_score == 0.5
        assert breakdown.category_score == 1.0
        assert breakdown.category_boost == CATEGORY_BOOST
        assert breakdown.score == score_compatibility(a, b) == 0.525
        assert breakdown.difficulty is Difficulty.HARD
        assert breakdown.shared_integrations == ["github"]
        assert breakdown.shared_categories == ["ide"]
        assert "Category synergy" in breakdown.notes
        assert "Shared integrations: github" in breakdown.notes
        assert breakdown.setup_steps == ["Configure integration for A + B"]

    def test_shared_limitations_are_reported(self) -> None:
        a = _tool("a", integrations=["github"], known_limitations=["Vendor lock-in"])
        b = _tool("b", integrations=["github"], known_limitations=["vendor lock-in"])

        breakdown = explain_compatibility(a, b)

        assert breakdown.limitation_penalty == 1.0
        assert breakdown.shared_limitations == ["vendor lock-in"]
        assert any(note.startswith("Shared limitations") for note in breakdown.notes)

    def test_no_shared_signals_has_no_notes(self) -> None:
        breakdown = explain_compatibility(_tool("a"), _tool("b"))

        assert breakdown.score == 0.0
        assert breakdown.category_boost == 0.0
        assert breakdown.notes == []
        assert breakdown.setup_steps == []

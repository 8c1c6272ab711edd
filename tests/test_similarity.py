"""Tests for the set-overlap primitives (scoring/similarity.py)."""

from __future__ import annotations

import pytest

from stackmatch.scoring.similarity import normalize_to_set, overlap_ratio


class TestOverlapRatio:
    def test_identical_sets(self) -> None:
        assert overlap_ratio({"a", "b"}, {"a", "b"}) == 1.0

    def test_partial_overlap(self) -> None:
        assert overlap_ratio({"github", "vercel"}, {"github"}) == 0.5

    def test_disjoint_sets(self) -> None:
        assert overlap_ratio({"a"}, {"b"}) == 0.0

    def test_empty_union_is_zero_not_nan(self) -> None:
        assert overlap_ratio(frozenset(), frozenset()) == 0.0

    def test_one_side_empty(self) -> None:
        assert overlap_ratio({"a"}, frozenset()) == 0.0

    def test_jaccard_counts_union(self) -> None:
        assert overlap_ratio({"a", "b", "c"}, {"b", "c", "d"}) == pytest.approx(2 / 4)


class TestNormalizeToSet:
    def test_none_is_empty(self) -> None:
        assert normalize_to_set(None) == frozenset()

    def test_lowercases_and_trims(self) -> None:
        assert normalize_to_set(["  GitHub ", "VERCEL"]) == {"github", "vercel"}

    def test_drops_empty_and_blank_entries(self) -> None:
        assert normalize_to_set(["", "   ", "react"]) == {"react"}

    def test_collapses_duplicates(self) -> None:
        assert normalize_to_set(["Git", "git", "GIT "]) == {"git"}

    def test_skips_none_and_stringifies_others(self) -> None:
        assert normalize_to_set([None, 3, "x"]) == {"3", "x"}

    def test_returns_frozenset(self) -> None:
        assert isinstance(normalize_to_set(["a"]), frozenset)

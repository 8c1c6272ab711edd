"""Set-overlap primitives shared by every scoring factor."""

from __future__ import annotations

from collections.abc import Iterable


def overlap_ratio(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> float:
    """Jaccard index ``|A ∩ B| / |A ∪ B|``. An empty union yields 0.0."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def normalize_to_set(values: Iterable[object] | None) -> frozenset[str]:
    """Lower-case and trim each entry, dropping empty ones.

    ``None`` is treated as an empty sequence. Non-string entries are
    stringified so a stray number in a registry record still compares.
    """
    if not values:
        return frozenset()
    normalized = set()
    for value in values:
        if value is None:
            continue
        text = str(value).strip().lower()
        if text:
            normalized.add(text)
    return frozenset(normalized)

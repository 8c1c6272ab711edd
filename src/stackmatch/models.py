"""Domain models for stackmatch. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ─── Registry Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """One catalog entry as read from the registry. Read-only to the engine."""

    id: str
    name: str = ""
    description: str = ""
    category: list[str] = field(default_factory=list)
    integrations: list[str] = field(default_factory=list)
    verified_integrations: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    known_limitations: list[str] = field(default_factory=list)
    popularity_score: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "tool_id": self.id,
            "name": self.name,
            "description": self.description,
            "category": list(self.category),
            "integrations": list(self.integrations),
            "verified_integrations": list(self.verified_integrations),
            "frameworks": list(self.frameworks),
            "languages": list(self.languages),
            "known_limitations": list(self.known_limitations),
            "popularity_score": self.popularity_score,
        }


@dataclass(frozen=True, slots=True)
class FeatureSets:
    """Normalized, comparable attribute sets extracted from a ToolDescriptor."""

    categories: frozenset[str] = frozenset()
    integrations: frozenset[str] = frozenset()
    verified_integrations: frozenset[str] = frozenset()
    frameworks: frozenset[str] = frozenset()
    languages: frozenset[str] = frozenset()
    known_limitations: frozenset[str] = frozenset()


# ─── Scoring Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PairScore:
    """Compatibility of one peer against the query anchor (subject)."""

    subject_id: str
    other_id: str
    name: str
    score: float
    rank_score: float

    def to_dict(self) -> dict[str, object]:
        return {
            "peer_id": self.other_id,
            "name": self.name,
            "score": self.score,
            "rank_score": self.rank_score,
        }


@dataclass(frozen=True, slots=True)
class CompatibilityBreakdown:
    """Per-factor explanation of a single pairwise score."""

    subject_id: str
    other_id: str
    integration_score: float
    category_score: float
    verified_score: float
    framework_score: float
    language_score: float
    limitation_penalty: float
    category_boost: float
    score: float
    difficulty: Difficulty
    shared_categories: list[str] = field(default_factory=list)
    shared_integrations: list[str] = field(default_factory=list)
    shared_frameworks: list[str] = field(default_factory=list)
    shared_languages: list[str] = field(default_factory=list)
    shared_limitations: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    setup_steps: list[str] = field(default_factory=list)


# ─── Persistence Models ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CompatibilityRecord:
    """One sub-record write keyed by (subject_id, peer_id)."""

    subject_id: str
    peer_id: str
    name: str
    score: float
    rank_score: float
    updated_at: str

    def fields(self) -> dict[str, object]:
        """Fields merged into the stored sub-record."""
        return {
            "score": self.score,
            "rank_score": self.rank_score,
            "updated_at": self.updated_at,
            "name": self.name,
        }


@dataclass(frozen=True, slots=True)
class CompatibilitySummary:
    """Rollup persisted on a tool's own record by the full recompute."""

    top_rank_score: float
    count_above_threshold: int
    last_computed_at: str

    def fields(self) -> dict[str, object]:
        return {
            "top_rank_score": self.top_rank_score,
            "count_above_threshold": self.count_above_threshold,
            "last_computed_at": self.last_computed_at,
        }


# ─── Engine Return Models ─────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MatchesResult:
    subject_id: str
    matches: list[PairScore] = field(default_factory=list)
    persisted: bool = False

    @property
    def count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict[str, object]:
        return {
            "subject_id": self.subject_id,
            "matches": [m.to_dict() for m in self.matches],
            "count": self.count,
            "persisted": self.persisted,
        }


@dataclass(frozen=True, slots=True)
class RecomputeResult:
    tools_processed: int
    writes_performed: int
    cancelled: bool = False

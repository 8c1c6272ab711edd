"""Single-target path: best compatible peers for one tool."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from stackmatch.errors import ToolNotFoundError
from stackmatch.models import CompatibilityRecord, MatchesResult, PairScore
from stackmatch.registry.base import ToolRegistryPort
from stackmatch.scoring.ranking import rank_candidates
from stackmatch.storage.base import CompatibilityStorePort

logger = logging.getLogger(__name__)

DEFAULT_QUERY_LIMIT = 5
MAX_QUERY_LIMIT = 20


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """Bound a caller-supplied limit to ``[1, maximum]``; None means ``default``."""
    if limit is None:
        return default
    return max(1, min(int(limit), maximum))


def now_iso() -> str:
    """Return current UTC time as an ISO 8601 string with Z suffix."""
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


def to_records(matches: list[PairScore], updated_at: str) -> list[CompatibilityRecord]:
    return [
        CompatibilityRecord(
            subject_id=match.subject_id,
            peer_id=match.other_id,
            name=match.name,
            score=match.score,
            rank_score=match.rank_score,
            updated_at=updated_at,
        )
        for match in matches
    ]


async def find_matches(
    registry: ToolRegistryPort,
    subject_id: str,
    *,
    limit: int | None = DEFAULT_QUERY_LIMIT,
    persist: bool = False,
    store: CompatibilityStorePort | None = None,
) -> MatchesResult:
    """Rank every other registry tool against ``subject_id``.

    Persisting merge-writes only the returned top matches. Sub-records for
    peers that dropped out of the top matches are left in place.

    Raises:
        ToolNotFoundError: ``subject_id`` is not in the registry snapshot.
        RegistryError: The registry could not be read.
        StorageError: ``persist`` was requested and the write failed.
    """
    limit = clamp_limit(limit, DEFAULT_QUERY_LIMIT, MAX_QUERY_LIMIT)
    tools = await registry.list_tools()

    subject = next((tool for tool in tools if tool.id == subject_id), None)
    if subject is None:
        raise ToolNotFoundError(subject_id)

    matches = rank_candidates(subject, tools)[:limit]

    persisted = False
    if persist and store is not None and matches:
        await store.commit(to_records(matches, now_iso()))
        persisted = True
        logger.info("Persisted %d matches for '%s'", len(matches), subject_id)

    return MatchesResult(subject_id=subject_id, matches=matches, persisted=persisted)

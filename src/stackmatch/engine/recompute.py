"""Full-registry recompute: refresh persisted top matches and summaries for every tool."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from stackmatch.engine.query import clamp_limit, now_iso, to_records
from stackmatch.models import CompatibilitySummary, PairScore, RecomputeResult
from stackmatch.registry.base import ToolRegistryPort
from stackmatch.scoring.features import FeatureCache
from stackmatch.scoring.ranking import rank_candidates
from stackmatch.storage.base import CompatibilityStorePort
from stackmatch.storage.batch import MAX_BATCH_OPERATIONS, BatchWriter

logger = logging.getLogger(__name__)

DEFAULT_RECOMPUTE_LIMIT = 10
MAX_RECOMPUTE_LIMIT = 50
SUMMARY_THRESHOLD = 0.7


def summarize(matches: list[PairScore], computed_at: str) -> CompatibilitySummary:
    """Roll kept matches up into the summary stored on the tool record."""
    return CompatibilitySummary(
        top_rank_score=max((m.rank_score for m in matches), default=0.0),
        count_above_threshold=sum(1 for m in matches if m.rank_score >= SUMMARY_THRESHOLD),
        last_computed_at=computed_at,
    )


async def recompute_all(
    registry: ToolRegistryPort,
    store: CompatibilityStorePort,
    *,
    limit: int | None = DEFAULT_RECOMPUTE_LIMIT,
    cancel_event: asyncio.Event | None = None,
    clock: Callable[[], str] = now_iso,
    max_batch_ops: int = MAX_BATCH_OPERATIONS,
) -> RecomputeResult:
    """Recompute and persist the top ``limit`` matches of every tool.

    Tools are processed in registry order. ``cancel_event`` is checked
    between tools only, so a tool's records and summary are never left
    half-written by a cancellation. A storage failure aborts the current
    tool and propagates; batches committed for earlier tools stay.

    Re-running on an unchanged registry rewrites the same values, so the
    job is safe to retry after a partial failure.
    """
    limit = clamp_limit(limit, DEFAULT_RECOMPUTE_LIMIT, MAX_RECOMPUTE_LIMIT)
    tools = await registry.list_tools()
    cache = FeatureCache()

    processed = 0
    writes = 0
    for subject in tools:
        # Yield so a cancel request can run between tools
        await asyncio.sleep(0)
        if cancel_event is not None and cancel_event.is_set():
            logger.warning("Recompute cancelled after %d of %d tools", processed, len(tools))
            return RecomputeResult(
                tools_processed=processed,
                writes_performed=writes,
                cancelled=True,
            )

        matches = rank_candidates(subject, tools, cache)[:limit]
        computed_at = clock()

        writer = BatchWriter(store, max_ops=max_batch_ops)
        for record in to_records(matches, computed_at):
            await writer.add(record)
        await writer.flush()
        writes += writer.writes

        await store.merge_summary(subject.id, summarize(matches, computed_at))
        processed += 1
        logger.debug("Recomputed %d matches for '%s'", len(matches), subject.id)

    logger.info("Recompute finished: %d tools, %d writes", processed, writes)
    return RecomputeResult(tools_processed=processed, writes_performed=writes)

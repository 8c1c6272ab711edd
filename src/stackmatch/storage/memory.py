"""In-process store, used when no store file is configured and in tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from stackmatch.models import CompatibilityRecord, CompatibilitySummary


@dataclass
class InMemoryStore:
    """Dict-backed store with merge semantics.

    ``batch_sizes`` records the size of every committed batch so callers can
    check the batching discipline.
    """

    records: dict[str, dict[str, dict[str, object]]] = field(default_factory=dict)
    summaries: dict[str, dict[str, object]] = field(default_factory=dict)
    batch_sizes: list[int] = field(default_factory=list)

    async def commit(self, records: Sequence[CompatibilityRecord]) -> None:
        for record in records:
            peers = self.records.setdefault(record.subject_id, {})
            peers.setdefault(record.peer_id, {}).update(record.fields())
        self.batch_sizes.append(len(records))

    async def merge_summary(self, tool_id: str, summary: CompatibilitySummary) -> None:
        self.summaries.setdefault(tool_id, {}).update(summary.fields())

    async def load_records(self, subject_id: str) -> dict[str, dict[str, object]]:
        return {peer: dict(fields) for peer, fields in self.records.get(subject_id, {}).items()}

    async def load_summary(self, tool_id: str) -> dict[str, object] | None:
        summary = self.summaries.get(tool_id)
        return dict(summary) if summary is not None else None

"""Port: persistence of compatibility sub-records and summaries."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from stackmatch.models import CompatibilityRecord, CompatibilitySummary


class CompatibilityStorePort(Protocol):
    """Port for the storage layer that owns persisted compatibility data.

    Every write is an upsert-merge: fields not named in the write are kept.
    """

    async def commit(self, records: Sequence[CompatibilityRecord]) -> None:
        """Apply one batch of sub-record writes keyed by (subject_id, peer_id)."""
        ...

    async def merge_summary(self, tool_id: str, summary: CompatibilitySummary) -> None:
        """Merge a compatibility summary into the tool's own record."""
        ...

    async def load_records(self, subject_id: str) -> dict[str, dict[str, object]]:
        """Return persisted sub-records for a subject, keyed by peer id."""
        ...

    async def load_summary(self, tool_id: str) -> dict[str, object] | None:
        """Return the persisted summary for a tool, or None if never computed."""
        ...

"""Exception hierarchy for stackmatch.

All exceptions inherit from StackMatchError (single catch point).
Infrastructure failures (registry reads, storage writes) share the
InfrastructureError base so callers can map them to one retry policy.
"""

from __future__ import annotations


class StackMatchError(Exception):
    """Base exception for all stackmatch errors."""


class ToolNotFoundError(StackMatchError):
    """Subject tool id is not present in the registry snapshot."""

    def __init__(self, tool_id: str) -> None:
        super().__init__(f"Tool '{tool_id}' not found in the registry.")
        self.tool_id = tool_id


class InfrastructureError(StackMatchError):
    """A registry read or storage write failed."""


class RegistryError(InfrastructureError):
    """Error reading tool descriptors from the registry."""


class StorageError(InfrastructureError):
    """Error persisting compatibility records or summaries."""

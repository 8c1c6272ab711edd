"""Port: read access to the tool registry."""

from __future__ import annotations

from typing import Protocol

from stackmatch.models import ToolDescriptor


class ToolRegistryPort(Protocol):
    """Port for loading a full snapshot of tool descriptors."""

    async def list_tools(self) -> list[ToolDescriptor]:
        """Return every tool descriptor in registry order."""
        ...

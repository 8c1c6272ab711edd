"""MCP server that answers "what pairs well with what" over the tool registry."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from stackmatch.config import Settings
from stackmatch.registry.base import ToolRegistryPort
from stackmatch.registry.catalog import FileToolRegistry, load_builtin_registry
from stackmatch.registry.client import HttpToolRegistry
from stackmatch.storage.base import CompatibilityStorePort
from stackmatch.storage.json_file import JsonFileStore
from stackmatch.storage.memory import InMemoryStore
from stackmatch.tools.catalog import get_tool, list_tools
from stackmatch.tools.explain import explain_compatibility
from stackmatch.tools.matches import find_compatible_tools
from stackmatch.tools.recompute import cancel_recompute, recompute_compatibility


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    http_client: httpx.AsyncClient
    settings: Settings
    registry: ToolRegistryPort
    store: CompatibilityStorePort
    recompute_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    recompute_cancel: asyncio.Event = field(default_factory=asyncio.Event)


def build_registry(settings: Settings, http_client: httpx.AsyncClient) -> ToolRegistryPort:
    """Pick the registry source: file, then URL, then the built-in sample catalog."""
    if settings.registry_file:
        return FileToolRegistry(Path(settings.registry_file))
    if settings.registry_url:
        return HttpToolRegistry(
            http_client,
            base_url=settings.registry_url,
            token=settings.registry_token,
        )
    return load_builtin_registry()


def build_store(settings: Settings) -> CompatibilityStorePort:
    if settings.store_file:
        return JsonFileStore(Path(settings.store_file))
    return InMemoryStore()


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle (the composition root)."""
    settings = Settings.from_env()
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(30.0, connect=10.0),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        transport=httpx.AsyncHTTPTransport(retries=3),
    ) as http_client:
        yield AppContext(
            http_client=http_client,
            settings=settings,
            registry=build_registry(settings, http_client),
            store=build_store(settings),
        )


mcp = FastMCP(
    "stackmatch",
    instructions=(
        "stackmatch scores how well developer tools in a curated registry work "
        "together, so you can suggest complementary tools when the user assembles "
        "a software stack.\n\n"
        "### Recommended workflow\n"
        "1. **list_tools** — See which tools the registry knows about.\n"
        "2. **find_compatible_tools** — Given a tool the user already uses, get the "
        "best partners. `score` is the compatibility in [0, 1]; `rank_score` only "
        "orders results and adds up to 20% for popular tools.\n"
        "3. **explain_compatibility** — Before recommending a pair, check why it "
        "scored the way it did: shared integrations, frameworks, languages, and any "
        "shared known limitations (which lower the score).\n"
        "4. **get_tool** — Inspect a tool's descriptor and its stored matches.\n\n"
        "### Maintenance\n"
        "- **recompute_compatibility** refreshes stored matches and summaries for "
        "every tool. It is idempotent and safe to re-run.\n"
        "- **cancel_recompute** stops a running recompute between tools."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(list_tools)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_tool)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(explain_compatibility)

# ─── Writing tools ────────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=False))(find_compatible_tools)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(recompute_compatibility)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=False))(cancel_recompute)

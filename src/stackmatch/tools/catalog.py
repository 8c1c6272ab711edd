"""list_tools / get_tool -- browse the registry."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from stackmatch.errors import StackMatchError
from stackmatch.tools._helpers import get_context


async def list_tools(ctx: Context) -> dict[str, object]:
    """List every tool in the registry (id, name, categories, popularity)."""
    try:
        app = get_context(ctx)
        tools = await app.registry.list_tools()
        return {
            "success": True,
            "count": len(tools),
            "tools": [
                {
                    "tool_id": tool.id,
                    "name": tool.name,
                    "category": list(tool.category),
                    "popularity_score": tool.popularity_score,
                }
                for tool in tools
            ],
        }
    except StackMatchError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in list_tools: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


async def get_tool(tool_id: str, ctx: Context) -> dict[str, object]:
    """Show one tool's descriptor plus its stored compatibility summary and matches."""
    try:
        app = get_context(ctx)
        tool = next((t for t in await app.registry.list_tools() if t.id == tool_id), None)
        if tool is None:
            return {"success": False, "error": f"Tool '{tool_id}' not found.", "not_found": True}
        return {
            "success": True,
            "tool": tool.to_dict(),
            "compatibility_summary": await app.store.load_summary(tool_id),
            "stored_matches": await app.store.load_records(tool_id),
        }
    except StackMatchError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_tool: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

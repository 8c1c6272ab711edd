"""find_compatible_tools tool -- best matching peers for one tool."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from stackmatch.engine.query import find_matches
from stackmatch.errors import StackMatchError, ToolNotFoundError
from stackmatch.tools._helpers import get_context


async def find_compatible_tools(
    tool_id: str,
    ctx: Context,
    limit: int = 5,
    persist: bool = False,
) -> dict[str, object]:
    """Find the registry tools that pair best with ``tool_id``.

    Every other tool is scored on shared integrations, categories,
    verified integrations, frameworks and languages, minus shared known
    limitations. Results are ordered by a popularity-adjusted rank score.

    Args:
        tool_id: Identifier of the tool to find partners for (e.g. "replit").
        limit: Maximum matches to return (1-20, default 5).
        persist: Also store the returned matches under the tool's record.

    Returns:
        ``subject_id``, ``matches`` (each with peer_id, name, score,
        rank_score) and ``count``. ``success=False`` with ``not_found=True``
        when the tool id is unknown.
    """
    if not tool_id:
        return {"success": False, "error": "tool_id is required."}
    try:
        app = get_context(ctx)
        result = await find_matches(
            app.registry,
            tool_id,
            limit=limit,
            persist=persist,
            store=app.store,
        )
        return {"success": True, **result.to_dict()}
    except ToolNotFoundError as exc:
        return {"success": False, "error": str(exc), "not_found": True}
    except StackMatchError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in find_compatible_tools: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

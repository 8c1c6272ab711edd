"""explain_compatibility tool -- factor-by-factor view of one pair."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from stackmatch.errors import StackMatchError, ToolNotFoundError
from stackmatch.scoring.ranking import rank_of
from stackmatch.scoring.scorer import explain_compatibility as explain_pair
from stackmatch.tools._helpers import get_context


async def explain_compatibility(
    tool_id: str,
    other_id: str,
    ctx: Context,
) -> dict[str, object]:
    """Explain how compatible two registry tools are and why.

    Args:
        tool_id: The anchor tool.
        other_id: The tool to compare against.

    Returns:
        Each weighted factor, the final score and rank score, an
        integration difficulty ("easy", "medium", "hard"), the labels the
        two tools share and short notes.
    """
    try:
        app = get_context(ctx)
        tools = {tool.id: tool for tool in await app.registry.list_tools()}
        for wanted in (tool_id, other_id):
            if wanted not in tools:
                raise ToolNotFoundError(wanted)
        subject, other = tools[tool_id], tools[other_id]
        breakdown = explain_pair(subject, other)
        output = asdict(breakdown)
        output["difficulty"] = breakdown.difficulty.value
        output["rank_score"] = rank_of(
            breakdown.score, subject.popularity_score, other.popularity_score
        )
        return {"success": True, **output}
    except ToolNotFoundError as exc:
        return {"success": False, "error": str(exc), "not_found": True}
    except StackMatchError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in explain_compatibility: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

"""recompute_compatibility / cancel_recompute tools -- refresh stored matches for every tool."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from stackmatch.engine.recompute import recompute_all
from stackmatch.errors import StackMatchError
from stackmatch.tools._helpers import get_context


async def recompute_compatibility(
    ctx: Context,
    limit: int = 10,
) -> dict[str, object]:
    """Recompute and store the top matches and summary of every registry tool.

    Args:
        limit: Matches kept per tool (1-50, default 10).

    Returns:
        ``tools_processed``, ``writes_performed`` and ``cancelled``.
    """
    try:
        app = get_context(ctx)
        if app.recompute_lock.locked():
            return {"success": False, "error": "A recompute is already running."}
        async with app.recompute_lock:
            app.recompute_cancel.clear()
            await ctx.info("Recomputing compatibility for the whole registry")
            result = await recompute_all(
                app.registry,
                app.store,
                limit=limit,
                cancel_event=app.recompute_cancel,
            )
        return {"success": True, **asdict(result)}
    except StackMatchError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in recompute_compatibility: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


async def cancel_recompute(ctx: Context) -> dict[str, object]:
    """Stop a running recompute after the tool currently being processed."""
    app = get_context(ctx)
    if not app.recompute_lock.locked():
        return {"success": True, "running": False}
    app.recompute_cancel.set()
    return {"success": True, "running": True}

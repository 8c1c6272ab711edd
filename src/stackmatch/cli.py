"""Admin command line: query, explain and recompute without an MCP client."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

import httpx

from stackmatch.config import Settings, configure_logging
from stackmatch.engine.query import DEFAULT_QUERY_LIMIT, find_matches
from stackmatch.engine.recompute import DEFAULT_RECOMPUTE_LIMIT, recompute_all
from stackmatch.errors import InfrastructureError, ToolNotFoundError
from stackmatch.models import MatchesResult
from stackmatch.scoring.scorer import explain_compatibility
from stackmatch.server import build_registry, build_store

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INFRASTRUCTURE = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stackmatch-admin",
        description="Compute developer tool compatibility from the configured registry.",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output.")
    sub = parser.add_subparsers(dest="command", required=True)

    query = sub.add_parser("query", help="Best matches for one tool.")
    query.add_argument("tool_id")
    query.add_argument("--limit", type=int, default=DEFAULT_QUERY_LIMIT)
    query.add_argument(
        "--persist",
        action="store_true",
        help="Store the returned matches under the tool's record.",
    )

    recompute = sub.add_parser("recompute", help="Refresh stored matches for every tool.")
    recompute.add_argument("--limit", type=int, default=DEFAULT_RECOMPUTE_LIMIT)

    explain = sub.add_parser("explain", help="Factor breakdown for one pair of tools.")
    explain.add_argument("tool_id")
    explain.add_argument("other_id")

    return parser.parse_args(argv)


def _format_matches(result: MatchesResult) -> str:
    lines = [f"Matches for {result.subject_id} ({result.count}):"]
    for rank, match in enumerate(result.matches, start=1):
        lines.append(
            f"{rank:>3}. {match.other_id:<24} score={match.score:.3f} "
            f"rank={match.rank_score:.3f}  {match.name}"
        )
    return "\n".join(lines)


async def _run(args: argparse.Namespace, settings: Settings) -> dict[str, object] | str:
    async with httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0)) as http_client:
        registry = build_registry(settings, http_client)
        store = build_store(settings)

        if args.command == "query":
            result = await find_matches(
                registry, args.tool_id, limit=args.limit, persist=args.persist, store=store
            )
            return result.to_dict() if args.json else _format_matches(result)

        if args.command == "recompute":
            summary = await recompute_all(registry, store, limit=args.limit)
            if args.json:
                return asdict(summary)
            return (
                f"Processed {summary.tools_processed} tools, "
                f"{summary.writes_performed} writes."
            )

        tools = {tool.id: tool for tool in await registry.list_tools()}
        for wanted in (args.tool_id, args.other_id):
            if wanted not in tools:
                raise ToolNotFoundError(wanted)
        breakdown = explain_compatibility(tools[args.tool_id], tools[args.other_id])
        if args.json:
            return asdict(breakdown)
        notes = "; ".join(breakdown.notes) or "no shared signals"
        return (
            f"{breakdown.subject_id} + {breakdown.other_id}: score={breakdown.score:.3f} "
            f"difficulty={breakdown.difficulty.value} ({notes})"
        )


def run_cli(argv: list[str] | None = None) -> int:
    """CLI runner. Exit codes: 0 ok, 1 tool not found, 2 registry/storage failure."""
    args = _parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    try:
        output = asyncio.run(_run(args, settings))
    except ToolNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except InfrastructureError as exc:
        logger.error("Infrastructure failure: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INFRASTRUCTURE

    print(json.dumps(output, indent=2) if isinstance(output, dict) else output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(run_cli())

"""Tolerant conversion of raw registry entries into ToolDescriptor objects."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from stackmatch.models import ToolDescriptor

logger = logging.getLogger(__name__)


def parse_tool(raw: dict) -> ToolDescriptor | None:
    """Parse one raw registry entry.

    Accepts ``tool_id`` or ``id`` as the identifier and ``languages`` or
    ``supported_languages`` for languages. Missing optional fields default
    to empty; entries without an identifier return None.
    """
    tool_id = raw.get("tool_id") or raw.get("id")
    if not tool_id:
        return None

    languages = raw.get("languages")
    if languages is None:
        languages = raw.get("supported_languages")

    return ToolDescriptor(
        id=str(tool_id),
        name=str(raw.get("name") or ""),
        description=str(raw.get("description") or ""),
        category=_string_list(raw.get("category")),
        integrations=_string_list(raw.get("integrations")),
        verified_integrations=_string_list(raw.get("verified_integrations")),
        frameworks=_string_list(raw.get("frameworks")),
        languages=_string_list(languages),
        known_limitations=_string_list(raw.get("known_limitations")),
        popularity_score=_to_float(raw.get("popularity_score")),
    )


def parse_tools(entries: Iterable[object], source: str = "") -> list[ToolDescriptor]:
    """Parse a sequence of raw entries, skipping the ones that cannot be identified."""
    tools: list[ToolDescriptor] = []
    for index, entry in enumerate(entries):
        tool = parse_tool(entry) if isinstance(entry, dict) else None
        if tool is None:
            logger.warning("Skipping registry entry #%d from %s: no tool id", index, source)
            continue
        tools.append(tool)
    return tools


def _string_list(value: object) -> list[str]:
    """Coerce a field to a list of strings. A bare string becomes one label."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value if item is not None]
    return []


def _to_float(value: object) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0

"""Tool registries backed by memory, a YAML/JSON file, or the built-in sample catalog."""

from __future__ import annotations

import asyncio
import importlib.resources
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from stackmatch.errors import RegistryError
from stackmatch.models import ToolDescriptor
from stackmatch.registry.parsing import parse_tools

logger = logging.getLogger(__name__)

BUILTIN_CATALOG = "sample"


@dataclass
class StaticToolRegistry:
    """Registry backed by an in-memory list of descriptors."""

    tools: list[ToolDescriptor] = field(default_factory=list)

    async def list_tools(self) -> list[ToolDescriptor]:
        return list(self.tools)


@dataclass
class FileToolRegistry:
    """Registry read from a YAML or JSON file on every snapshot.

    The file holds either a bare list of tool entries or a mapping with a
    ``tools`` list. Re-reading per call keeps the engine's snapshot semantics:
    each query sees the file as it is now.
    """

    path: Path

    async def list_tools(self) -> list[ToolDescriptor]:
        if not self.path.exists():
            raise RegistryError(f"Registry file not found: {self.path}")
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as exc:
            raise RegistryError(f"Failed to read registry file '{self.path}': {exc}") from exc
        return parse_catalog(text, source=str(self.path))


def parse_catalog(text: str, source: str = "") -> list[ToolDescriptor]:
    """Parse YAML (or JSON) catalog text into tool descriptors."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RegistryError(f"Invalid registry format in {source}: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("tools", [])
    if not isinstance(data, list):
        raise RegistryError(f"Invalid registry format in {source}: 'tools' must be a list.")
    return parse_tools(data, source=source)


def load_builtin_registry(name: str = BUILTIN_CATALOG) -> StaticToolRegistry:
    """Load a catalog shipped with the package."""
    try:
        ref = importlib.resources.files("stackmatch.registry") / "presets" / f"{name}.yaml"
        text = ref.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise RegistryError(f"Built-in catalog '{name}' not found.") from None
    tools = parse_catalog(text, source=f"builtin:{name}")
    logger.info("Loaded %d tools from built-in catalog '%s'", len(tools), name)
    return StaticToolRegistry(tools=tools)

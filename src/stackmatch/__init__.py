"""stackmatch: find the developer tools that pair well with the ones you use."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

_LOCAL_VERSION_FALLBACK = "0.0.0+local"


def _resolve_version() -> str:
    """Resolve package version from installed metadata with deterministic fallback."""
    try:
        return _distribution_version("stackmatch")
    except PackageNotFoundError:
        return _LOCAL_VERSION_FALLBACK


__version__ = _resolve_version()


def main() -> None:
    """Entry point for `stackmatch` CLI (MCP server over stdio)."""
    from stackmatch.config import Settings, configure_logging
    from stackmatch.server import mcp

    configure_logging(Settings.from_env().log_level)
    mcp.run(transport="stdio")

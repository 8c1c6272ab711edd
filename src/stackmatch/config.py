"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

_REGISTRY_FILE_ENV = "STACKMATCH_REGISTRY_FILE"
_REGISTRY_URL_ENV = "STACKMATCH_REGISTRY_URL"
_REGISTRY_TOKEN_ENV = "STACKMATCH_REGISTRY_TOKEN"
_STORE_FILE_ENV = "STACKMATCH_STORE_FILE"
_LOG_LEVEL_ENV = "STACKMATCH_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class Settings:
    """Where the registry is read from and where compatibility is persisted.

    Registry precedence: ``registry_file`` > ``registry_url`` > built-in sample.
    Without ``store_file`` results are kept in memory for the process lifetime.
    """

    registry_file: str = ""
    registry_url: str = ""
    registry_token: str = ""
    store_file: str = ""
    log_level: str = _DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        source = env if env is not None else os.environ
        log_level = source.get(_LOG_LEVEL_ENV, "").strip().upper() or _DEFAULT_LOG_LEVEL
        return cls(
            registry_file=source.get(_REGISTRY_FILE_ENV, "").strip(),
            registry_url=source.get(_REGISTRY_URL_ENV, "").strip().rstrip("/"),
            registry_token=source.get(_REGISTRY_TOKEN_ENV, "").strip(),
            store_file=source.get(_STORE_FILE_ENV, "").strip(),
            log_level=log_level,
        )


def configure_logging(level: str = _DEFAULT_LOG_LEVEL) -> None:
    """Send log records to stderr; stdout belongs to the MCP stdio transport."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=_LOG_FORMAT, stream=sys.stderr)

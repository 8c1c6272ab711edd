"""HTTP client for a remote tool registry API.

Expects ``GET {base_url}/tools`` to return either a bare JSON list of tool
entries or an envelope such as ``{"success": true, "data": [...]}``.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from stackmatch.errors import RegistryError
from stackmatch.models import ToolDescriptor
from stackmatch.registry.parsing import parse_tools

_ENVELOPE_KEYS = ("data", "tools")


@dataclass
class HttpToolRegistry:
    """Async client that downloads the full registry snapshot."""

    http: httpx.AsyncClient
    base_url: str
    token: str = ""

    async def list_tools(self) -> list[ToolDescriptor]:
        """Fetch every tool descriptor from the registry.

        Raises:
            RegistryError: On transport errors, non-2xx responses or
                a payload that is not a list of entries.
        """
        url = f"{self.base_url.rstrip('/')}/tools"
        try:
            response = await self.http.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RegistryError(f"Failed to load tool registry from {url}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryError(f"Tool registry at {url} returned invalid JSON") from exc

        return parse_tools(self._extract_entries(payload, url), source=url)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _extract_entries(payload: object, url: str) -> list:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in _ENVELOPE_KEYS:
                entries = payload.get(key)
                if isinstance(entries, list):
                    return entries
        raise RegistryError(f"Unexpected tool registry payload from {url}: expected a list")

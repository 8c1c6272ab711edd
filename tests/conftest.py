"""Shared test fixtures."""

from __future__ import annotations

import pytest

from stackmatch.storage.memory import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory compatibility store."""
    return InMemoryStore()

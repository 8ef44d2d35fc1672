"""Shared test fixtures for Artivault."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from artivault.core.backend import MemoryBackend
from artivault.core.clock import ManualClock
from artivault.core.vault import Vault

VALID_HASH = "ab" * 32


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manual block-height clock starting at height 100."""
    return ManualClock(100)


@pytest.fixture
def backend() -> MemoryBackend:
    """Provide a fresh in-memory state backend."""
    return MemoryBackend()


@pytest.fixture
def vault(backend: MemoryBackend, clock: ManualClock) -> Vault:
    """Provide a journaled vault over the memory backend and manual clock."""
    return Vault(backend, clock)


@pytest.fixture
def artifact_fields() -> Callable[..., dict[str, Any]]:
    """Factory fixture: valid create() keyword arguments with overrides."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "label": "L",
            "integrity_hash": VALID_HASH,
            "content": "c",
            "category": "cat",
            "tags": ["t1"],
        }
        fields.update(overrides)
        return fields

    return _factory


@pytest.fixture
def revision_fields() -> Callable[..., dict[str, Any]]:
    """Factory fixture: valid update() keyword arguments with overrides."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "label": "X",
            "integrity_hash": "cd" * 32,
            "content": "revised",
            "tags": ["t2", "t3"],
        }
        fields.update(overrides)
        return fields

    return _factory

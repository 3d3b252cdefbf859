"""Retrieval port abstraction."""

from __future__ import annotations

from typing import Protocol

from ..domain import MemoryHit


class RetrievalPort(Protocol):
    """Abstract interface for the memory store queried behind the gate."""

    def search(self, query: str, top_k: int = 5) -> list[MemoryHit]:  # pragma: no cover - protocol
        ...

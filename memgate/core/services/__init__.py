"""Application services for memgate."""

from .gated_retrieval import GatedRetrievalService
from .query_gate import QueryGate

__all__ = ["QueryGate", "GatedRetrievalService"]

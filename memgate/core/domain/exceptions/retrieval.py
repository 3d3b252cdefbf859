"""Retrieval exceptions for memgate."""

from .base import MemGateError


class RetrievalError(MemGateError):
    """Error while handing a gated query to the memory store."""

    error_code = "MG_RET_001"


class RetrievalBackendError(RetrievalError):
    """The memory store raised while serving a search.

    Common causes:
    - Embedding service unavailable
    - Vector store connection dropped
    """

    error_code = "MG_RET_002"

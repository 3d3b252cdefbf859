"""Validation exceptions for memgate."""

from .base import MemGateError


class ValidationError(MemGateError):
    """Input validation failed."""

    error_code = "MG_VAL_001"


class InvalidQueryError(ValidationError):
    """Retrieval request parameters are invalid."""

    error_code = "MG_VAL_002"

"""Custom exception hierarchy for memgate.

Each exception includes an error code, the function it was raised from,
optional cause chaining and JSON serialization for structured logging.

    from memgate.core.domain.exceptions import MemGateError, RetrievalBackendError
"""

# Base classes
from .base import MemGateError, RaiseSite

# Configuration exceptions
from .configuration import ConfigurationError, InvalidConfigurationError

# Retrieval exceptions
from .retrieval import RetrievalBackendError, RetrievalError

# Validation exceptions
from .validation import InvalidQueryError, ValidationError

__all__ = [
    # Base
    "RaiseSite",
    "MemGateError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    # Validation
    "ValidationError",
    "InvalidQueryError",
    # Retrieval
    "RetrievalError",
    "RetrievalBackendError",
]

"""Configuration-related exceptions for memgate."""

from .base import MemGateError


class ConfigurationError(MemGateError):
    """Configuration or environment variable errors."""

    error_code = "MG_CFG_001"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid.

    Raised when a gate threshold or logging option loaded from the
    environment fails validation.
    """

    error_code = "MG_CFG_002"

"""Settings and logging configuration."""

from .logging import setup_logging
from .settings import Settings, get_settings, load_settings

__all__ = ["Settings", "get_settings", "load_settings", "setup_logging"]

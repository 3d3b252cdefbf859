"""FastAPI dependency wiring for memgate."""

import logging
from functools import lru_cache

from ....config.settings import get_settings
from ....core.services.query_gate import QueryGate

logger = logging.getLogger(__name__)


@lru_cache
def get_gate() -> QueryGate:
    """Get or create the QueryGate singleton."""
    settings = get_settings()
    logger.info(
        "Initializing QueryGate (floor=%d, cjk=%d, default=%d)",
        settings.min_query_length,
        settings.cjk_min_length,
        settings.default_min_length,
    )
    return QueryGate.from_settings(settings)

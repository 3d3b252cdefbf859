"""Domain models for memgate.

- rules: the static skip / force-retrieve / risk rule tables
- decision: GateDecision, SkipReason and retrieval result models

    from memgate.core.domain import GateDecision, SkipReason
"""

from .decision import GatedRetrieval, GateDecision, MemoryHit, SkipReason
from .rules import PatternRule

__all__ = [
    # Rule models
    "PatternRule",
    # Decision models
    "GateDecision",
    "SkipReason",
    # Retrieval models
    "MemoryHit",
    "GatedRetrieval",
]

"""memgate: retrieval gate for memory-augmented assistants.

Decides whether an incoming message deserves a memory lookup and, for risky
requests, rewrites the query with safety-policy anchors.

    from memgate import should_skip_retrieval, expand_query_for_risk

    if not should_skip_retrieval(message):
        hits = store.search(expand_query_for_risk(message))
"""

__version__ = "0.1.0"

from .core.domain import GateDecision, SkipReason  # noqa: E402
from .core.services.query_gate import (  # noqa: E402
    QueryGate,
    expand_query_for_risk,
    explain,
    is_risk_related_query,
    should_skip_retrieval,
)

__all__ = [
    "__version__",
    "QueryGate",
    "GateDecision",
    "SkipReason",
    "should_skip_retrieval",
    "is_risk_related_query",
    "expand_query_for_risk",
    "explain",
]

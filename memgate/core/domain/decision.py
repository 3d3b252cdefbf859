"""Gate decision models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SkipReason(Enum):
    """Which step of the gate cascade produced the decision.

    Attributes:
        FORCE_RETRIEVE: The query references memory or past turns.
        TOO_SHORT: The query is below the absolute length floor.
        SKIP_PATTERN: The query is filler, a command or system traffic.
        SHORT_NON_QUESTION: The query is short for its script and asks nothing.
        DEFAULT: Nothing matched; retrieval proceeds.
    """

    FORCE_RETRIEVE = "force_retrieve"
    TOO_SHORT = "too_short"
    SKIP_PATTERN = "skip_pattern"
    SHORT_NON_QUESTION = "short_non_question"
    DEFAULT = "default"


@dataclass(frozen=True)
class GateDecision:
    """Outcome of running one query through the gate.

    Attributes:
        query: The trimmed query.
        skip: True when the caller should bypass retrieval.
        reason: The cascade step that decided.
        matched_rule: Name of the rule that matched, if a rule decided.
        risk: True when the query touches a risky operation.
        retrieval_query: Query to hand to retrieval, None when skipped.
    """

    query: str
    skip: bool
    reason: SkipReason
    matched_rule: str | None = None
    risk: bool = False
    retrieval_query: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "skip": self.skip,
            "reason": self.reason.value,
            "matched_rule": self.matched_rule,
            "risk": self.risk,
            "retrieval_query": self.retrieval_query,
        }


@dataclass
class MemoryHit:
    """A single memory returned by the retrieval subsystem."""

    content: str
    score: float
    metadata: dict[str, Any]


@dataclass
class GatedRetrieval:
    """Result of a gated retrieval call.

    ``hits`` is None when the gate skipped retrieval, and a (possibly empty)
    list when the memory store was queried.
    """

    decision: GateDecision
    hits: list[MemoryHit] | None = None

    @property
    def retrieved(self) -> bool:
        return self.hits is not None

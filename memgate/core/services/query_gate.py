"""Retrieval gate: decide whether a query is worth a memory lookup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain import GateDecision, SkipReason
from ..domain.rules import (
    CJK_MIN_LENGTH,
    DEFAULT_MIN_LENGTH,
    FORCE_RETRIEVE_RULES,
    MIN_QUERY_LENGTH,
    POLICY_HINTS_TAG,
    QUESTION_MARKS,
    RISK_ANCHORS,
    RISK_RULES,
    SKIP_RULES,
    contains_cjk,
    first_match,
)

if TYPE_CHECKING:
    from ...config.settings import Settings

logger = logging.getLogger(__name__)


class QueryGate:
    """Classify incoming messages before they reach the memory store.

    The gate holds only length thresholds; the rule tables are module-level
    constants, so one instance can be shared freely.
    """

    def __init__(
        self,
        min_query_length: int = MIN_QUERY_LENGTH,
        cjk_min_length: int = CJK_MIN_LENGTH,
        default_min_length: int = DEFAULT_MIN_LENGTH,
    ) -> None:
        """Initialize the gate.

        Args:
            min_query_length: Absolute floor below which queries are skipped.
            cjk_min_length: Short-message threshold for text containing CJK.
            default_min_length: Short-message threshold for all other text.
        """
        self.min_query_length = min_query_length
        self.cjk_min_length = cjk_min_length
        self.default_min_length = default_min_length

    @classmethod
    def from_settings(cls, settings: Settings) -> QueryGate:
        return cls(
            min_query_length=settings.min_query_length,
            cjk_min_length=settings.cjk_min_length,
            default_min_length=settings.default_min_length,
        )

    def explain(self, query: str) -> GateDecision:
        """Run the gate cascade and report which step decided.

        The steps run in a fixed order and the first one that fires wins:
        force-retrieve rules, the length floor, skip rules, then the
        script-aware short-message check.

        Args:
            query: Raw user message.

        Returns:
            GateDecision for the trimmed query.
        """
        # Lengths below count code points. str.strip() leaves U+FEFF in place.
        trimmed = query.strip()
        risk = self.is_risk_related_query(trimmed)

        force_rule = first_match(FORCE_RETRIEVE_RULES, trimmed)
        if force_rule:
            return self._retrieve(trimmed, SkipReason.FORCE_RETRIEVE, force_rule.name, risk)

        if len(trimmed) < self.min_query_length:
            return self._skip(trimmed, SkipReason.TOO_SHORT, None, risk)

        skip_rule = first_match(SKIP_RULES, trimmed)
        if skip_rule:
            return self._skip(trimmed, SkipReason.SKIP_PATTERN, skip_rule.name, risk)

        min_length = self.cjk_min_length if contains_cjk(trimmed) else self.default_min_length
        if len(trimmed) < min_length and not any(mark in trimmed for mark in QUESTION_MARKS):
            return self._skip(trimmed, SkipReason.SHORT_NON_QUESTION, None, risk)

        return self._retrieve(trimmed, SkipReason.DEFAULT, None, risk)

    def should_skip_retrieval(self, query: str) -> bool:
        """Return True when memory retrieval should be bypassed for ``query``."""
        return self.explain(query).skip

    def is_risk_related_query(self, query: str) -> bool:
        """Return True when ``query`` mentions a destructive or security-sensitive operation."""
        trimmed = query.strip()
        return first_match(RISK_RULES, trimmed) is not None

    def expand_query_for_risk(self, query: str) -> str:
        """Append safety-policy anchors to risky queries.

        Hybrid (lexical + semantic) retrieval then has literal policy terms to
        match against, which pulls stored safety constraints into context.
        Non-risky queries come back trimmed and otherwise unchanged.

        Expansion is not idempotent: an expanded risky query is still risky,
        so expanding it again appends a second anchor block.

        Args:
            query: Raw user message.

        Returns:
            The trimmed query, followed by a blank line and the anchor block
            when the query is risky.
        """
        trimmed = query.strip()
        if not trimmed:
            return trimmed
        if not self.is_risk_related_query(trimmed):
            return trimmed

        return f"{trimmed}\n\n{POLICY_HINTS_TAG} {' '.join(RISK_ANCHORS)}"

    def _skip(
        self, trimmed: str, reason: SkipReason, rule: str | None, risk: bool
    ) -> GateDecision:
        return self._logged(
            GateDecision(query=trimmed, skip=True, reason=reason, matched_rule=rule, risk=risk)
        )

    def _retrieve(
        self, trimmed: str, reason: SkipReason, rule: str | None, risk: bool
    ) -> GateDecision:
        return self._logged(
            GateDecision(
                query=trimmed,
                skip=False,
                reason=reason,
                matched_rule=rule,
                risk=risk,
                retrieval_query=self.expand_query_for_risk(trimmed) if risk else trimmed,
            )
        )

    @staticmethod
    def _logged(decision: GateDecision) -> GateDecision:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Retrieval %s",
                "skipped" if decision.skip else "required",
                extra={"decision": decision.to_dict()},
            )
        return decision


default_gate = QueryGate()


def should_skip_retrieval(query: str) -> bool:
    """Return True when memory retrieval should be bypassed for ``query``."""
    return default_gate.should_skip_retrieval(query)


def is_risk_related_query(query: str) -> bool:
    """Return True when ``query`` mentions a destructive or security-sensitive operation."""
    return default_gate.is_risk_related_query(query)


def expand_query_for_risk(query: str) -> str:
    """Append safety-policy anchors to ``query`` when it is risk-related."""
    return default_gate.expand_query_for_risk(query)


def explain(query: str) -> GateDecision:
    """Return the full gate decision for ``query``."""
    return default_gate.explain(query)

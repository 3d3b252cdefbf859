"""Use-case service that puts the gate in front of the memory store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain import GatedRetrieval
from ..domain.exceptions import InvalidQueryError, RetrievalBackendError
from ..ports.retrieval_port import RetrievalPort
from .query_gate import QueryGate

if TYPE_CHECKING:
    from ...config.settings import Settings

logger = logging.getLogger(__name__)


class GatedRetrievalService:
    """Run the gate, then query the memory store only when it is worth it."""

    def __init__(
        self,
        gate: QueryGate,
        retriever: RetrievalPort,
        expand_risky: bool = True,
    ) -> None:
        """Initialize the service.

        Args:
            gate: Gate deciding whether and how to retrieve.
            retriever: Memory store adapter.
            expand_risky: Whether risky queries get safety-policy anchors
                before they are sent to the store.
        """
        self.gate = gate
        self.retriever = retriever
        self.expand_risky = expand_risky

    @classmethod
    def from_settings(cls, settings: Settings, retriever: RetrievalPort) -> GatedRetrievalService:
        return cls(
            QueryGate.from_settings(settings),
            retriever,
            expand_risky=settings.expand_risky_queries,
        )

    def retrieve(self, query: str, top_k: int = 5) -> GatedRetrieval:
        if top_k <= 0:
            raise InvalidQueryError("top_k must be positive", context={"top_k": top_k})

        decision = self.gate.explain(query)
        if decision.skip:
            logger.info("Retrieval skipped (%s)", decision.reason.value)
            return GatedRetrieval(decision=decision)

        search_query = decision.retrieval_query if self.expand_risky else decision.query
        if decision.risk and self.expand_risky:
            logger.info("Risk-related query, searching with policy anchors")

        try:
            hits = self.retriever.search(search_query, top_k=top_k)
        except Exception as e:
            raise RetrievalBackendError(
                "Memory store search failed",
                cause=e,
                context={"top_k": top_k, "risk": decision.risk},
            ) from e

        logger.info("Retrieved %d memories (%s)", len(hits), decision.reason.value)
        return GatedRetrieval(decision=decision, hits=hits)

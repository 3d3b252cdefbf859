"""Gate endpoints used by the conversation orchestrator."""

from fastapi import APIRouter, Depends

from .....core.services.query_gate import QueryGate
from ..deps import get_gate
from ..models import ErrorResponse, ExpandResponse, GateDecisionResponse, QueryRequest

router = APIRouter(prefix="/v1/gate", tags=["gate"])


@router.post(
    "/check",
    response_model=GateDecisionResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)
async def check_query(
    request: QueryRequest, gate: QueryGate = Depends(get_gate)
) -> GateDecisionResponse:
    """Decide whether retrieval should run for a message.

    Args:
        request: The message to classify.

    Returns:
        GateDecisionResponse describing the decision and the retrieval query.
    """
    decision = gate.explain(request.query)
    return GateDecisionResponse(**decision.to_dict())


@router.post(
    "/expand",
    response_model=ExpandResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)
async def expand_query(request: QueryRequest, gate: QueryGate = Depends(get_gate)) -> ExpandResponse:
    """Rewrite a risky message with safety-policy anchors."""
    risk = gate.is_risk_related_query(request.query)
    return ExpandResponse(
        query=request.query,
        expanded_query=gate.expand_query_for_risk(request.query),
        risk=risk,
    )

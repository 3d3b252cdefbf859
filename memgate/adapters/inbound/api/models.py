"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request model for gating a query."""

    query: str = Field(
        ...,
        description="Raw user message, any length, including empty",
        json_schema_extra={"example": "Do you remember what I said about the deploy script?"},
    )


class GateDecisionResponse(BaseModel):
    """Response model for a gate decision."""

    query: str = Field(..., description="The trimmed query")
    skip: bool = Field(..., description="True when retrieval should be bypassed")
    reason: str = Field(..., description="Cascade step that decided (e.g. force_retrieve)")
    matched_rule: str | None = Field(None, description="Name of the rule that matched")
    risk: bool = Field(..., description="True when the query touches a risky operation")
    retrieval_query: str | None = Field(
        None, description="Query to send to retrieval, absent when skipped"
    )


class ExpandResponse(BaseModel):
    """Response model for risk expansion."""

    query: str = Field(..., description="The query as received")
    expanded_query: str = Field(..., description="Trimmed query, with policy anchors if risky")
    risk: bool = Field(..., description="True when anchors were appended")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., MG_VAL_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Response model for structured errors."""

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    raised_at: str | None = Field(
        None, description="Where the error was raised, as 'file:line in function'"
    )
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")

"""
API Schemas
===========

Pydantic models for API request/response validation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from nl_postgres.schemas import ChartConfig, ExplanationSegment


class GenerateQueryRequest(BaseModel):
    """Request body for query generation."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Natural language question about the unicorns dataset",
        examples=["Show me the top 5 companies by valuation"],
    )


class GenerateQueryResponse(BaseModel):
    """Generated SQL for a question."""

    query: str = Field(..., description="Generated SQL query")
    request_id: str = Field(..., description="Unique request identifier")


class RunQueryRequest(BaseModel):
    """Request body for query execution."""

    query: str = Field(..., min_length=1, description="SQL SELECT query to run")


class RunQueryResponse(BaseModel):
    """Rows returned by an executed query."""

    rows: list[dict[str, Any]] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)
    row_count: int = Field(..., description="Number of rows returned")
    request_id: str = Field(..., description="Unique request identifier")


class ExplainQueryRequest(BaseModel):
    """Request body for query explanation."""

    question: str = Field(..., min_length=1, max_length=1000)
    query: str = Field(..., min_length=1)


class ExplainQueryResponse(BaseModel):
    """Clause-by-clause explanation of a query."""

    explanations: list[ExplanationSegment]
    request_id: str = Field(..., description="Unique request identifier")


class ChartRequest(BaseModel):
    """Request body for chart config generation."""

    question: str = Field(..., min_length=1, max_length=1000)
    rows: list[dict[str, Any]] = Field(..., description="Rows returned by the query")


class ChartResponse(BaseModel):
    """Suggested chart configuration."""

    config: ChartConfig
    request_id: str = Field(..., description="Unique request identifier")


class AskResponse(BaseModel):
    """Full pipeline output for a question."""

    question: str
    query: str
    rows: list[dict[str, Any]]
    columns: list[str]
    explanations: list[ExplanationSegment]
    config: ChartConfig
    request_id: str = Field(..., description="Unique request identifier")
    processing_time_ms: float = Field(..., description="Processing time in milliseconds")


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Health check response."""

    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual component health checks",
    )


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="Whether the service is ready to handle requests")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness checks",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    request_id: str | None = Field(None, description="Request ID if available")
    details: dict[str, Any] | None = Field(None, description="Additional error details")

"""
Query Routes
============

Endpoints for the four pipeline operations and the combined ``ask`` flow.
"""

import time
import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from api.schemas import (
    AskResponse,
    ChartRequest,
    ChartResponse,
    ErrorResponse,
    ExplainQueryRequest,
    ExplainQueryResponse,
    GenerateQueryRequest,
    GenerateQueryResponse,
    RunQueryRequest,
    RunQueryResponse,
)
from nl_postgres.pipeline import InsightsPipeline
from observability.metrics import track_operation

router = APIRouter(prefix="/api/v1", tags=["Query"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Query rejected by the safety gate"},
    502: {"model": ErrorResponse, "description": "Model or database failure"},
    503: {"model": ErrorResponse, "description": "Dataset not provisioned"},
}


def get_pipeline(request: Request) -> InsightsPipeline:
    """Dependency to get the configured pipeline from app state."""
    return request.app.state.pipeline


def get_request_id(request: Request) -> str:
    """Return the correlation ID set by the telemetry middleware."""
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


PipelineDep = Annotated[InsightsPipeline, Depends(get_pipeline)]
RequestIdDep = Annotated[str, Depends(get_request_id)]


def columns_of(rows: list[dict[str, Any]]) -> list[str]:
    """Column names of a result set, in result order."""
    return list(rows[0]) if rows else []


@router.post(
    "/query/generate",
    response_model=GenerateQueryResponse,
    responses=ERROR_RESPONSES,
    summary="Generate SQL for a question",
)
async def generate_query(
    body: GenerateQueryRequest,
    pipeline: PipelineDep,
    request_id: RequestIdDep,
) -> GenerateQueryResponse:
    async with track_operation("generate_query"):
        query = await pipeline.generate_query(body.question)
    return GenerateQueryResponse(query=query, request_id=request_id)


@router.post(
    "/query/run",
    response_model=RunQueryResponse,
    responses=ERROR_RESPONSES,
    summary="Run a read-only query",
    description="Validates the query with the safety gate, then executes it once",
)
async def run_query(
    body: RunQueryRequest,
    pipeline: PipelineDep,
    request_id: RequestIdDep,
) -> RunQueryResponse:
    async with track_operation("run_query"):
        rows = await pipeline.run_query(body.query)
    return RunQueryResponse(
        rows=rows,
        columns=columns_of(rows),
        row_count=len(rows),
        request_id=request_id,
    )


@router.post(
    "/query/explain",
    response_model=ExplainQueryResponse,
    responses=ERROR_RESPONSES,
    summary="Explain a query clause by clause",
)
async def explain_query(
    body: ExplainQueryRequest,
    pipeline: PipelineDep,
    request_id: RequestIdDep,
) -> ExplainQueryResponse:
    async with track_operation("explain_query"):
        explanations = await pipeline.explain_query(body.question, body.query)
    return ExplainQueryResponse(explanations=explanations, request_id=request_id)


@router.post(
    "/chart",
    response_model=ChartResponse,
    responses=ERROR_RESPONSES,
    summary="Suggest a chart configuration for query results",
)
async def generate_chart_config(
    body: ChartRequest,
    pipeline: PipelineDep,
    request_id: RequestIdDep,
) -> ChartResponse:
    async with track_operation("generate_chart_config"):
        config = await pipeline.generate_chart_config(body.rows, body.question)
    return ChartResponse(config=config, request_id=request_id)


@router.post(
    "/ask",
    response_model=AskResponse,
    responses=ERROR_RESPONSES,
    summary="Answer a question end to end",
    description=(
        "Generates SQL, runs it behind the safety gate, then explains the query "
        "and suggests a chart concurrently"
    ),
)
async def ask(
    body: GenerateQueryRequest,
    pipeline: PipelineDep,
    request_id: RequestIdDep,
) -> AskResponse:
    start_time = time.perf_counter()

    async with track_operation("ask"):
        result = await pipeline.ask(body.question)

    return AskResponse(
        question=result.request,
        query=result.query,
        rows=result.rows,
        columns=columns_of(result.rows),
        explanations=result.explanations,
        config=result.chart,
        request_id=request_id,
        processing_time_ms=(time.perf_counter() - start_time) * 1000,
    )

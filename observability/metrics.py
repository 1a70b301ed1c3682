"""
Prometheus Metrics
==================

Application metrics for monitoring and alerting.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
    multiprocess,
)

from nl_postgres.models import SafetyVerdict

# Create a custom registry for this application
REGISTRY = CollectorRegistry()

APP_INFO = Info(
    "nl_postgres",
    "NL Postgres application information",
    registry=REGISTRY,
)

# Pipeline operation metrics
OPERATIONS_TOTAL = Counter(
    "nl_postgres_operations_total",
    "Total pipeline operations processed",
    ["operation", "status"],  # success, failure
    registry=REGISTRY,
)

OPERATION_DURATION = Histogram(
    "nl_postgres_operation_duration_seconds",
    "Pipeline operation duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

OPERATION_ERRORS = Counter(
    "nl_postgres_operation_errors_total",
    "Pipeline errors by operation and error kind",
    ["operation", "kind"],
    registry=REGISTRY,
)

GATE_VERDICTS = Counter(
    "nl_postgres_gate_verdicts_total",
    "Safety gate verdicts",
    ["verdict"],  # allowed, rejected
    registry=REGISTRY,
)

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=REGISTRY,
)

ACTIVE_REQUESTS = Gauge(
    "nl_postgres_active_requests",
    "Number of pipeline requests currently being processed",
    registry=REGISTRY,
)


def setup_metrics(app: FastAPI, version: str = "0.1.0", environment: str = "development") -> None:
    """
    Set up Prometheus metrics for the FastAPI application.

    Args:
        app: FastAPI application instance
        version: Application version
        environment: Deployment environment name
    """
    APP_INFO.info({
        "version": version,
        "environment": environment,
    })

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next: Callable) -> Response:
        """Middleware to track HTTP metrics."""
        start_time = time.perf_counter()

        is_pipeline_endpoint = request.url.path.startswith("/api/v1")
        if is_pipeline_endpoint:
            ACTIVE_REQUESTS.inc()

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            HTTP_REQUESTS_TOTAL.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code,
            ).inc()

            HTTP_REQUEST_DURATION.labels(
                method=request.method,
                endpoint=request.url.path,
            ).observe(duration)

            return response
        finally:
            if is_pipeline_endpoint:
                ACTIVE_REQUESTS.dec()


@asynccontextmanager
async def track_operation(operation: str) -> AsyncIterator[None]:
    """
    Time a pipeline operation and count its outcome.

    Errors are counted by exception class name and re-raised unchanged.

    Args:
        operation: Operation name used as the metric label
    """
    start_time = time.perf_counter()
    try:
        yield
    except Exception as e:
        OPERATIONS_TOTAL.labels(operation=operation, status="failure").inc()
        OPERATION_ERRORS.labels(operation=operation, kind=type(e).__name__).inc()
        raise
    else:
        OPERATIONS_TOTAL.labels(operation=operation, status="success").inc()
    finally:
        OPERATION_DURATION.labels(operation=operation).observe(time.perf_counter() - start_time)


def record_gate_verdict(verdict: SafetyVerdict) -> None:
    """Count a safety gate verdict; installed as the gate's verdict hook."""
    GATE_VERDICTS.labels(verdict="allowed" if verdict.allowed else "rejected").inc()


async def metrics_endpoint(request: Request) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    # Handle multiprocess mode if using gunicorn
    try:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        metrics = generate_latest(registry)
    except ValueError:
        # Not in multiprocess mode
        metrics = generate_latest(REGISTRY)

    return Response(
        content=metrics,
        media_type=CONTENT_TYPE_LATEST,
    )

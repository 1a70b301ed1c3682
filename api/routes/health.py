"""
Health Check Routes
===================

Kubernetes-compatible health and readiness endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from api import __version__
from api.schemas import HealthResponse, HealthStatus, ReadinessResponse
from observability.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the service",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint for load balancers and monitoring.

    Returns:
        HealthResponse with current service status
    """
    checks = {
        "api": True,
        "pipeline": getattr(request.app.state, "pipeline", None) is not None,
    }

    all_healthy = all(checks.values())
    status = HealthStatus.HEALTHY if all_healthy else HealthStatus.DEGRADED

    return HealthResponse(
        status=status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        checks=checks,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Returns whether the service is ready to handle requests",
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Readiness check for Kubernetes.

    The database must answer a trivial query before the pod receives traffic.
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    database_ok = False
    if pipeline is not None:
        try:
            await pipeline.gate.storage.query("SELECT 1")
            database_ok = True
        except Exception as e:
            logger.warning("Database not reachable", error=str(e))

    checks = {
        "pipeline_configured": pipeline is not None,
        "database": database_ok,
    }

    return ReadinessResponse(
        ready=all(checks.values()),
        checks=checks,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Simple liveness probe",
)
async def liveness_check() -> dict:
    """Liveness check for Kubernetes."""
    return {"status": "ok"}

"""
OpenTelemetry Tracing
=====================

Distributed tracing for request flow visualization.
"""

import structlog
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = structlog.get_logger(__name__)


def setup_tracing(
    app: FastAPI,
    service_name: str = "nl-postgres-api",
    otlp_endpoint: str = "disabled",
    environment: str = "development",
    version: str = "0.1.0",
) -> None:
    """
    Set up OpenTelemetry tracing for the application.

    Args:
        app: FastAPI application instance
        service_name: Name of the service for traces
        otlp_endpoint: OTLP collector endpoint, or "disabled" to skip export
        environment: Deployment environment name
        version: Service version
    """
    resource = Resource.create({
        SERVICE_NAME: service_name,
        "service.version": version,
        "deployment.environment": environment,
    })

    provider = TracerProvider(resource=resource)

    if otlp_endpoint and otlp_endpoint != "disabled":
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
        logger.info("Exporting traces", endpoint=otlp_endpoint)

    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app)

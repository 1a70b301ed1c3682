"""
FastAPI Application
===================

Main FastAPI application for the natural-language Postgres insights service.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.errors import register_error_handlers
from api.middleware.telemetry import TelemetryMiddleware
from api.routes.health import router as health_router
from api.routes.query import router as query_router
from nl_postgres.config import Settings, get_settings
from nl_postgres.db import close_database, get_database
from nl_postgres.llm.base import StructuredLLM
from nl_postgres.llm.mock import MockLLM
from nl_postgres.llm.openai import OpenAIStructuredLLM
from nl_postgres.pipeline import InsightsPipeline
from observability.logging_config import get_logger, setup_logging
from observability.metrics import metrics_endpoint, record_gate_verdict, setup_metrics
from observability.tracing import setup_tracing

# Canned answers for LLM_PROVIDER=mock
DEMO_RESPONSES = {
    "GeneratedQuery": {
        "top": [
            {
                "query": "SELECT company, valuation FROM unicorns "
                "ORDER BY valuation DESC LIMIT 5"
            }
        ],
    },
    "ExplanationSegmentArray": {
        "valuation": [
            {
                "elements": [
                    {"segment": "SELECT company, valuation", "explanation": "Pick the company name and its valuation."},
                    {"segment": "FROM unicorns", "explanation": "Read from the unicorns table."},
                    {"segment": "ORDER BY valuation DESC", "explanation": "Sort from most to least valuable."},
                    {"segment": "LIMIT 5", "explanation": "Keep only the first five rows."},
                ]
            }
        ],
    },
    "ChartSuggestion": {
        "valuation": [
            {
                "type": "bar",
                "title": "Top companies by valuation",
                "xKey": "company",
                "yKeys": ["valuation"],
                "legend": False,
            }
        ],
    },
}


def create_llm(settings: Settings) -> StructuredLLM:
    """Create the structured LLM provider named in settings."""
    if settings.LLM_PROVIDER == "mock":
        return MockLLM(responses=DEMO_RESPONSES)
    return OpenAIStructuredLLM(
        model=settings.OPENAI_MODEL,
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )


def create_pipeline(settings: Settings) -> InsightsPipeline:
    """Create and configure the insights pipeline."""
    return InsightsPipeline(
        llm=create_llm(settings),
        storage=get_database(settings),
        on_verdict=record_gate_verdict,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    settings = get_settings()

    # Startup
    setup_logging(
        level=settings.LOG_LEVEL,
        json_format=settings.LOG_FORMAT.lower() == "json" or None,
        environment=settings.ENVIRONMENT,
    )
    setup_tracing(
        app,
        otlp_endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
        environment=settings.ENVIRONMENT,
        version=__version__,
    )
    logger = get_logger(__name__)
    logger.info(
        "Starting NL Postgres API",
        version=__version__,
        llm_provider=settings.LLM_PROVIDER,
    )

    app.state.pipeline = create_pipeline(settings)

    yield

    # Shutdown
    await close_database()
    logger.info("Shutting down NL Postgres API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="NL Postgres Insights API",
        description=(
            "Ask questions about the unicorns dataset in plain language. "
            "Generates read-only SQL, runs it, explains it and suggests a chart."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(query_router)

    setup_metrics(app, version=__version__, environment=settings.ENVIRONMENT)
    app.add_route("/metrics", metrics_endpoint)

    register_error_handlers(app)

    return app


# Create app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

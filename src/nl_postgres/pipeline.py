"""
Insights Pipeline
=================

Composes the generator, gate, explainer and chart synthesizer.

The four operations are independent and safe to call again. ``ask`` runs
them end to end: generation and execution are sequential, then explanation
and chart synthesis run concurrently and are joined before returning.
"""

import asyncio
from typing import Callable, Sequence

import structlog
from opentelemetry import trace

from nl_postgres.charts import ChartSynthesizer
from nl_postgres.explainer import QueryExplainer
from nl_postgres.gate import ExecutionGate, QueryExecutor
from nl_postgres.generation import StructuredGenerator
from nl_postgres.llm.base import StructuredLLM
from nl_postgres.models import PipelineResult, ResultRow, SafetyVerdict
from nl_postgres.query_generator import QueryGenerator
from nl_postgres.schemas import ChartConfig, ExplanationSegment

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class InsightsPipeline:
    """Natural-language question in, query, rows, explanation and chart out."""

    def __init__(
        self,
        llm: StructuredLLM,
        storage: QueryExecutor,
        chart_synthesizer: ChartSynthesizer | None = None,
        on_verdict: Callable[[SafetyVerdict], None] | None = None,
    ) -> None:
        generator = StructuredGenerator(llm)
        self.query_generator = QueryGenerator(generator)
        self.gate = ExecutionGate(storage, on_verdict=on_verdict)
        self.explainer = QueryExplainer(generator)
        self.chart_synthesizer = chart_synthesizer or ChartSynthesizer(generator)

    async def generate_query(self, request: str) -> str:
        with tracer.start_as_current_span("generate_query"):
            return await self.query_generator.generate(request)

    async def run_query(self, query: str) -> list[ResultRow]:
        with tracer.start_as_current_span("run_query") as span:
            rows = await self.gate.execute(query)
            span.set_attribute("query.row_count", len(rows))
            return rows

    async def explain_query(self, request: str, query: str) -> list[ExplanationSegment]:
        with tracer.start_as_current_span("explain_query") as span:
            segments = await self.explainer.explain(request, query)
            span.set_attribute("explanation.segment_count", len(segments))
            return segments

    async def generate_chart_config(self, rows: Sequence[ResultRow], request: str) -> ChartConfig:
        with tracer.start_as_current_span("generate_chart_config") as span:
            config = await self.chart_synthesizer.synthesize(rows, request)
            span.set_attribute("chart.type", config.type.value)
            return config

    async def ask(self, request: str) -> PipelineResult:
        """
        Run the whole pipeline for one request.

        The first failure is raised with its original type; a sibling task
        still running at that point is cancelled. No partial result is
        returned.
        """
        with tracer.start_as_current_span("ask"):
            query = await self.generate_query(request)
            rows = await self.run_query(query)

            try:
                async with asyncio.TaskGroup() as tg:
                    explain_task = tg.create_task(self.explain_query(request, query))
                    chart_task = tg.create_task(self.generate_chart_config(rows, request))
            except ExceptionGroup as eg:
                raise eg.exceptions[0]

            logger.info("Pipeline completed", request=request, row_count=len(rows))
            return PipelineResult(
                request=request,
                query=query,
                rows=rows,
                explanations=explain_task.result(),
                chart=chart_task.result(),
            )

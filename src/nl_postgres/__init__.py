"""
Natural-Language Postgres Insights
==================================

Ask questions about the unicorns dataset in plain language: generate SQL,
run it behind a read-only safety gate, explain it, and suggest a chart.
"""

from nl_postgres.charts import DEFAULT_PALETTE, ChartSynthesizer, assign_colors, theme_color
from nl_postgres.exceptions import (
    ChartGenerationFailed,
    ExecutionFailed,
    ExplanationFailed,
    GenerationFailed,
    MissingRelation,
    NLPostgresError,
    NotReadOnly,
    QueryGenerationFailed,
)
from nl_postgres.explainer import QueryExplainer, reconstructs_query
from nl_postgres.gate import ExecutionGate
from nl_postgres.generation import StructuredGenerator
from nl_postgres.llm import MockLLM, OpenAIStructuredLLM, StructuredLLM
from nl_postgres.models import PipelineResult, ResultRow, SafetyVerdict
from nl_postgres.pipeline import InsightsPipeline
from nl_postgres.query_generator import QueryGenerator
from nl_postgres.schemas import ChartConfig, ChartType, ExplanationSegment

__version__ = "0.1.0"

__all__ = [
    # Models
    "ResultRow",
    "SafetyVerdict",
    "PipelineResult",
    "ExplanationSegment",
    "ChartConfig",
    "ChartType",
    # Errors
    "NLPostgresError",
    "NotReadOnly",
    "MissingRelation",
    "ExecutionFailed",
    "GenerationFailed",
    "QueryGenerationFailed",
    "ExplanationFailed",
    "ChartGenerationFailed",
    # Components
    "ExecutionGate",
    "StructuredGenerator",
    "QueryGenerator",
    "QueryExplainer",
    "reconstructs_query",
    "ChartSynthesizer",
    "assign_colors",
    "DEFAULT_PALETTE",
    "theme_color",
    "InsightsPipeline",
    # LLM
    "StructuredLLM",
    "MockLLM",
    "OpenAIStructuredLLM",
]

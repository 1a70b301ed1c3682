"""
Data Models
===========

Core data structures shared by the gate, the model providers and the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from nl_postgres.schemas import ChartConfig, ExplanationSegment

# A single result row: column name -> scalar value
ResultRow = dict[str, Any]


class VerificationStatus(Enum):
    """Status of a verification check."""

    PASSED = "passed"
    FAILED = "failed"


@dataclass
class VerificationResult:
    """Result of a single verification step."""

    verifier_name: str
    status: VerificationStatus
    message: str
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class SafetyVerdict:
    """
    Allow/deny decision produced by the execution gate before any execution.

    ``kind`` names the error a rejected query raises on execute
    (``"NotReadOnly"``); ``reason`` is the failing verifier's message.
    """

    allowed: bool
    reason: Optional[str] = None
    results: tuple[VerificationResult, ...] = ()
    kind: Optional[str] = None


@dataclass
class LLMResponse:
    """Response from a structured LLM call."""

    content: Any
    model: str
    tokens_used: int = 0


@dataclass(frozen=True)
class PipelineResult:
    """Everything produced for a single natural-language request."""

    request: str
    query: str
    rows: list[ResultRow]
    explanations: list[ExplanationSegment]
    chart: ChartConfig

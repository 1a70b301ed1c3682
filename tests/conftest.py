"""
Pytest Fixtures
===============

Shared fixtures for the insights pipeline tests.
"""

from decimal import Decimal
from typing import Any, Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from nl_postgres.db import StorageError
from nl_postgres.gate import ExecutionGate
from nl_postgres.generation import StructuredGenerator
from nl_postgres.llm.mock import MockLLM
from nl_postgres.models import VerificationStatus
from nl_postgres.pipeline import InsightsPipeline
from nl_postgres.verifiers.base import VerificationChain
from nl_postgres.verifiers.keywords import MutationKeywordVerifier
from nl_postgres.verifiers.read_only import ReadOnlyVerifier

TOP_5_QUERY = "SELECT company, valuation FROM unicorns ORDER BY valuation DESC LIMIT 5"

TOP_5_ROWS = [
    {"company": "ByteDance", "valuation": Decimal("180.00")},
    {"company": "SpaceX", "valuation": Decimal("100.30")},
    {"company": "SHEIN", "valuation": Decimal("100.00")},
    {"company": "Stripe", "valuation": Decimal("95.00")},
    {"company": "Klarna", "valuation": Decimal("45.60")},
]

TOP_5_EXPLANATION = {
    "elements": [
        {"segment": "SELECT company, valuation", "explanation": "Pick the name and valuation."},
        {"segment": "FROM unicorns", "explanation": ""},
        {"segment": "ORDER BY valuation DESC", "explanation": "Most valuable first."},
        {"segment": "LIMIT 5", "explanation": "Keep five rows."},
    ]
}

TOP_5_CHART = {
    "type": "bar",
    "title": "Top 5 unicorns by valuation",
    "xKey": "company",
    "yKeys": ["valuation"],
    "colors": {"valuation": "#ff0000"},
    "legend": False,
}


class FakeStorage:
    """Storage engine double that records every executed statement."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.rows = rows if rows is not None else []
        self.error = error
        self.executed: list[str] = []

    async def query(self, sql: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        self.executed.append(sql)
        if self.error is not None:
            raise self.error
        return list(self.rows)


@pytest.fixture
def storage() -> FakeStorage:
    """Storage that returns the top 5 unicorns."""
    return FakeStorage(rows=TOP_5_ROWS)


@pytest.fixture
def missing_table_storage() -> FakeStorage:
    """Storage whose table has not been created."""
    return FakeStorage(
        error=StorageError('relation "unicorns" does not exist', sqlstate="42P01")
    )


@pytest.fixture
def gate(storage: FakeStorage) -> ExecutionGate:
    """Create an ExecutionGate over the fake storage."""
    return ExecutionGate(storage)


@pytest.fixture
def read_only_verifier() -> ReadOnlyVerifier:
    """Create a ReadOnlyVerifier instance."""
    return ReadOnlyVerifier()


@pytest.fixture
def keyword_verifier() -> MutationKeywordVerifier:
    """Create a MutationKeywordVerifier instance."""
    return MutationKeywordVerifier()


@pytest.fixture
def verification_chain() -> VerificationChain:
    """Create a default verification chain."""
    return VerificationChain()


@pytest.fixture
def mock_llm() -> MockLLM:
    """Create a mock LLM that answers the top-5 question."""
    return MockLLM(
        responses={
            "GeneratedQuery": {"top 5": [{"query": TOP_5_QUERY}]},
            "ExplanationSegmentArray": {"top 5": [TOP_5_EXPLANATION]},
            "ChartSuggestion": {"top 5": [TOP_5_CHART]},
        }
    )


@pytest.fixture
def generator(mock_llm: MockLLM) -> StructuredGenerator:
    """Create a StructuredGenerator over the mock LLM."""
    return StructuredGenerator(mock_llm)


@pytest.fixture
def pipeline(mock_llm: MockLLM, storage: FakeStorage) -> InsightsPipeline:
    """Create a pipeline over the mock LLM and fake storage."""
    return InsightsPipeline(llm=mock_llm, storage=storage)


@pytest_asyncio.fixture
async def client(mock_llm: MockLLM, storage: FakeStorage):
    """HTTP client against the app, wired to a test pipeline that counts verdicts."""
    from api.main import app
    from observability.metrics import record_gate_verdict

    app.state.pipeline = InsightsPipeline(
        llm=mock_llm, storage=storage, on_verdict=record_gate_verdict
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.state.pipeline = None


def assert_verification_passed(result) -> None:
    """Helper assertion for verification results."""
    assert result.status == VerificationStatus.PASSED, f"Expected PASSED, got: {result.message}"


def assert_verification_failed(result) -> None:
    """Helper assertion for verification failures."""
    assert result.status == VerificationStatus.FAILED, f"Expected FAILED, got: {result.message}"

"""
Unit Tests for MockLLM
======================
"""

import pytest

from nl_postgres.llm.mock import MockLLM


async def generate(llm: MockLLM, prompt: str, schema_name: str = "GeneratedQuery"):
    return await llm.generate(
        prompt=prompt, system_prompt="system", json_schema={}, schema_name=schema_name
    )


class TestMockLLM:
    """Tests for the MockLLM implementation."""

    async def test_response_matching(self) -> None:
        llm = MockLLM(
            responses={
                "GeneratedQuery": {
                    "company": [{"query": "SELECT company FROM unicorns"}],
                    "country": [{"query": "SELECT country FROM unicorns"}],
                }
            }
        )

        response1 = await generate(llm, "Show me each Company")
        assert "company" in response1.content["query"]

        response2 = await generate(llm, "Show me each country")
        assert "country" in response2.content["query"]

    async def test_matching_is_per_schema(self) -> None:
        llm = MockLLM(
            responses={
                "GeneratedQuery": {"test": [{"query": "SELECT 1"}]},
                "ChartSuggestion": {"test": [{"type": "bar"}]},
            }
        )
        response = await generate(llm, "test", schema_name="ChartSuggestion")
        assert response.content == {"type": "bar"}

    async def test_sequential_responses(self) -> None:
        llm = MockLLM(responses={"GeneratedQuery": {"test": ["first", "second", "third"]}})

        assert (await generate(llm, "test")).content == "first"
        assert (await generate(llm, "test")).content == "second"
        assert (await generate(llm, "test")).content == "third"
        assert (await generate(llm, "test")).content == "third"  # Stays at last

    async def test_exception_response_is_raised(self) -> None:
        llm = MockLLM(responses={"GeneratedQuery": {"test": [RuntimeError("boom")]}})
        with pytest.raises(RuntimeError, match="boom"):
            await generate(llm, "test")

    async def test_reset(self) -> None:
        llm = MockLLM(responses={"GeneratedQuery": {"test": ["first", "second"]}})

        await generate(llm, "test")
        await generate(llm, "test")
        llm.reset()
        assert (await generate(llm, "test")).content == "first"
        assert len(llm.calls) == 1

    async def test_default_fallback(self) -> None:
        llm = MockLLM(responses={})
        response = await generate(llm, "unknown query")
        assert "unknown_table" in response.content["query"]

        response = await generate(llm, "unknown query", schema_name="ChartSuggestion")
        assert response.content == {}

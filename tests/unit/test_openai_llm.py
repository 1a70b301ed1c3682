"""
Unit Tests for OpenAIStructuredLLM
==================================

Chat completion handling against an in-process client double.
"""

from types import SimpleNamespace

import pytest

from nl_postgres.exceptions import GenerationFailed
from nl_postgres.generation import StructuredGenerator
from nl_postgres.llm.openai import OpenAIStructuredLLM
from nl_postgres.schemas import GeneratedQuery


class FakeCompletions:
    def __init__(self, content: str | None, refusal: str | None = None) -> None:
        self.content = content
        self.refusal = refusal
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content, refusal=self.refusal)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=message)],
            model="gpt-4o-2024-08-06",
            usage=SimpleNamespace(total_tokens=42),
        )


def fake_client(content: str | None, refusal: str | None = None):
    completions = FakeCompletions(content, refusal)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


async def generate(llm: OpenAIStructuredLLM):
    return await llm.generate(
        prompt="top 5 companies",
        system_prompt="system",
        json_schema=GeneratedQuery.model_json_schema(),
        schema_name="GeneratedQuery",
    )


class TestOpenAIStructuredLLM:
    """Tests for the OpenAI provider."""

    async def test_content_decoded(self) -> None:
        client, _ = fake_client('{"query": "select 1"}')
        response = await generate(OpenAIStructuredLLM(client=client))

        assert response.content == {"query": "select 1"}
        assert response.model == "gpt-4o-2024-08-06"
        assert response.tokens_used == 42

    async def test_request_shape(self) -> None:
        client, completions = fake_client('{"query": "select 1"}')
        await generate(OpenAIStructuredLLM(model="gpt-4o-mini", client=client))

        request = completions.requests[0]
        assert request["model"] == "gpt-4o-mini"
        assert request["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "top 5 companies"},
        ]
        assert request["response_format"]["type"] == "json_schema"
        assert request["response_format"]["json_schema"]["name"] == "GeneratedQuery"

    async def test_refusal_raises(self) -> None:
        client, _ = fake_client(None, refusal="I can't help with that")
        with pytest.raises(ValueError, match="refused"):
            await generate(OpenAIStructuredLLM(client=client))

    async def test_empty_content_raises(self) -> None:
        client, _ = fake_client("")
        with pytest.raises(ValueError, match="empty"):
            await generate(OpenAIStructuredLLM(client=client))


class TestOpenAIThroughGenerator:
    """Provider faults surface as GenerationFailed."""

    async def test_conforming_output(self) -> None:
        client, _ = fake_client('{"query": "SELECT company FROM unicorns"}')
        generator = StructuredGenerator(OpenAIStructuredLLM(client=client))

        result = await generator.generate_object("system", "a question", GeneratedQuery)
        assert result.query == "SELECT company FROM unicorns"

    @pytest.mark.parametrize(
        "content,refusal",
        [
            (None, "I can't help with that"),
            ("", None),
            ('{"query": "SELECT', None),
        ],
        ids=["refusal", "empty", "malformed-json"],
    )
    async def test_faults_become_generation_failed(self, content, refusal) -> None:
        client, _ = fake_client(content, refusal)
        generator = StructuredGenerator(OpenAIStructuredLLM(client=client))

        with pytest.raises(GenerationFailed) as exc_info:
            await generator.generate_object("system", "a question", GeneratedQuery)
        assert exc_info.value.context["schema"] == "GeneratedQuery"

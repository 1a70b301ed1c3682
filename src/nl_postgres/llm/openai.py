"""
OpenAI Provider
===============

Structured output through OpenAI chat completions with a JSON schema
response format.
"""

import json
from typing import Any

from openai import AsyncOpenAI

from nl_postgres.llm.base import StructuredLLM
from nl_postgres.models import LLMResponse


class OpenAIStructuredLLM(StructuredLLM):
    """OpenAI chat completions provider."""

    DEFAULT_MODEL = "gpt-4o"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            model: Chat model name
            api_key: OpenAI API key. Falls back to OPENAI_API_KEY env var.
            timeout: Per-request timeout in seconds
            client: Pre-built client, mainly for tests
        """
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=timeout)

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        json_schema: dict[str, Any],
        schema_name: str,
    ) -> LLMResponse:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": json_schema},
            },
        )

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise ValueError(f"Model refused the request: {message.refusal}")
        if not message.content:
            raise ValueError("Model returned an empty response")

        return LLMResponse(
            content=json.loads(message.content),
            model=response.model,
            tokens_used=response.usage.total_tokens if response.usage else 0,
        )

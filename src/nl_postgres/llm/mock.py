"""
Mock LLM
========

Mock structured LLM for testing and demonstration.
"""

from typing import Any

from nl_postgres.llm.base import StructuredLLM
from nl_postgres.models import LLMResponse


class MockLLM(StructuredLLM):
    """
    Mock LLM returning canned JSON values.

    In production, replace with OpenAIStructuredLLM.
    """

    DEFAULT_RESPONSES: dict[str, Any] = {
        "GeneratedQuery": {"query": "SELECT * FROM unknown_table"},
    }

    def __init__(self, responses: dict[str, dict[str, list[Any]]] | None = None) -> None:
        """
        Initialize with canned responses.

        Args:
            responses: Dict mapping a schema name to a dict of prompt
                       substrings -> list of successive responses. A response
                       that is an exception instance is raised instead of
                       returned.
        """
        self.responses = responses or {}
        self.call_counts: dict[tuple[str, str], int] = {}
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        json_schema: dict[str, Any],
        schema_name: str,
    ) -> LLMResponse:
        """
        Return the next canned response for the first matching key.

        Keys are matched case-insensitively against the prompt.
        """
        self.calls.append(
            {"prompt": prompt, "system_prompt": system_prompt, "schema_name": schema_name}
        )

        for key, attempts in self.responses.get(schema_name, {}).items():
            if key.lower() in prompt.lower():
                count = self.call_counts.get((schema_name, key), 0)
                self.call_counts[(schema_name, key)] = count + 1

                attempt = attempts[min(count, len(attempts) - 1)]
                if isinstance(attempt, Exception):
                    raise attempt
                return LLMResponse(content=attempt, model="mock-llm-v1")

        # Default fallback
        return LLMResponse(
            content=self.DEFAULT_RESPONSES.get(schema_name, {}),
            model="mock-llm-v1",
        )

    def reset(self) -> None:
        """Reset call counts and recorded calls for fresh test runs."""
        self.call_counts = {}
        self.calls = []

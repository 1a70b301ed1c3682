"""
Base LLM Interface
==================

Abstract interface for providers that return schema-constrained JSON.
"""

from abc import ABC, abstractmethod
from typing import Any

from nl_postgres.models import LLMResponse


class StructuredLLM(ABC):
    """Abstract interface for structured-output LLM providers."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        json_schema: dict[str, Any],
        schema_name: str,
    ) -> LLMResponse:
        """
        Ask the model for a JSON value conforming to ``json_schema``.

        Args:
            prompt: The user prompt
            system_prompt: Fixed system instruction for the call site
            json_schema: JSON schema the output must satisfy
            schema_name: Identifier for the schema

        Returns:
            LLMResponse whose content is the decoded JSON value
        """
        pass

"""
Query Generator
===============

Turns a natural-language request into a candidate SQL query. The generator
only proposes; validation belongs to the execution gate.
"""

import structlog

from nl_postgres.exceptions import GenerationFailed, QueryGenerationFailed
from nl_postgres.generation import StructuredGenerator
from nl_postgres.prompts import SQL_QUERY_PROMPT_TEMPLATE, SQL_QUERY_SYSTEM_PROMPT
from nl_postgres.schemas import GeneratedQuery

logger = structlog.get_logger(__name__)


class QueryGenerator:
    """Generates SQL for the fixed dataset schema."""

    SYSTEM_PROMPT = SQL_QUERY_SYSTEM_PROMPT

    def __init__(self, generator: StructuredGenerator) -> None:
        self.generator = generator

    async def generate(self, request: str) -> str:
        """
        Generate a query for the user's request.

        Returns:
            The model's query string, unmodified

        Raises:
            QueryGenerationFailed: If the model produced no conforming output
        """
        prompt = SQL_QUERY_PROMPT_TEMPLATE.format(request=request)
        try:
            result = await self.generator.generate_object(
                self.SYSTEM_PROMPT, prompt, GeneratedQuery
            )
        except GenerationFailed as e:
            logger.error("Query generation failed", request=request, cause=e.message)
            raise QueryGenerationFailed(context=e.context) from e

        logger.info("Query generated", query=result.query)
        return result.query

"""
Query Explainer
===============

Breaks a generated query into ordered (segment, explanation) pairs.

Segmentation is delegated to the model through its system instruction.
Coverage of the query is advisory: the explainer reports, but does not
repair, a segmentation that fails to reconstruct the query.
"""

import re

import structlog

from nl_postgres.exceptions import ExplanationFailed, GenerationFailed
from nl_postgres.generation import StructuredGenerator
from nl_postgres.prompts import SQL_EXPLAIN_PROMPT_TEMPLATE, SQL_EXPLAIN_SYSTEM_PROMPT
from nl_postgres.schemas import ExplanationSegment

logger = structlog.get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def reconstructs_query(query: str, segments: list[ExplanationSegment]) -> bool:
    """Whether the segments, joined in order, give back the query up to whitespace."""
    joined = "".join(segment.segment for segment in segments)
    return _WHITESPACE.sub("", joined).lower() == _WHITESPACE.sub("", query).lower()


class QueryExplainer:
    """Explains a query clause by clause."""

    SYSTEM_PROMPT = SQL_EXPLAIN_SYSTEM_PROMPT

    def __init__(self, generator: StructuredGenerator) -> None:
        self.generator = generator

    async def explain(self, request: str, query: str) -> list[ExplanationSegment]:
        """
        Explain ``query`` in the context of the request that produced it.

        Raises:
            ExplanationFailed: If the model produced no conforming output
        """
        prompt = SQL_EXPLAIN_PROMPT_TEMPLATE.format(request=request, query=query)
        try:
            segments = await self.generator.generate_array(
                self.SYSTEM_PROMPT, prompt, ExplanationSegment
            )
        except GenerationFailed as e:
            logger.error("Query explanation failed", query=query, cause=e.message)
            raise ExplanationFailed(context=e.context) from e

        if not reconstructs_query(query, segments):
            logger.warning(
                "Explanation segments do not cover the query",
                query=query,
                segment_count=len(segments),
            )

        return segments

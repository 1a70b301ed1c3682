"""
Structured Generation
=====================

The single seam through which model output enters the pipeline.

``StructuredGenerator`` asks a provider for JSON matching a pydantic schema
and validates the result. It guarantees structural conformance only: a
well-formed but wrong answer is a valid output. Each call is one attempt;
there is no retry or repair loop here.
"""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from nl_postgres.exceptions import GenerationFailed
from nl_postgres.llm.base import StructuredLLM

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# Array outputs are requested wrapped in an object under this key
ARRAY_ENVELOPE_KEY = "elements"


def array_schema(schema: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for an object holding an array of ``schema`` items."""
    item_schema = schema.model_json_schema()
    defs = item_schema.pop("$defs", None)
    envelope: dict[str, Any] = {
        "type": "object",
        "properties": {
            ARRAY_ENVELOPE_KEY: {"type": "array", "items": item_schema},
        },
        "required": [ARRAY_ENVELOPE_KEY],
    }
    if defs:
        envelope["$defs"] = defs
    return envelope


class StructuredGenerator:
    """Obtains schema-conforming objects from a structured LLM."""

    def __init__(self, llm: StructuredLLM) -> None:
        self.llm = llm

    async def _invoke(
        self,
        system_prompt: str,
        prompt: str,
        json_schema: dict[str, Any],
        schema_name: str,
    ) -> Any:
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                json_schema=json_schema,
                schema_name=schema_name,
            )
        except Exception as e:
            logger.warning("Model invocation failed", schema=schema_name, error=str(e))
            raise GenerationFailed(context={"schema": schema_name, "cause": str(e)}) from e

        if response.content in (None, "", {}, []):
            logger.warning("Model returned empty output", schema=schema_name)
            raise GenerationFailed(
                "Model returned empty output", {"schema": schema_name}
            )

        logger.debug(
            "Model output received",
            schema=schema_name,
            model=response.model,
            tokens_used=response.tokens_used,
        )
        return response.content

    async def generate_object(self, system_prompt: str, prompt: str, schema: type[T]) -> T:
        """
        Generate a single object conforming to ``schema``.

        Raises:
            GenerationFailed: On any invocation fault or non-conforming output
        """
        schema_name = schema.__name__
        content = await self._invoke(
            system_prompt, prompt, schema.model_json_schema(), schema_name
        )
        try:
            return schema.model_validate(content)
        except ValidationError as e:
            logger.warning("Model output failed validation", schema=schema_name, errors=e.error_count())
            raise GenerationFailed(
                "Model output does not match the requested schema",
                {"schema": schema_name, "errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e

    async def generate_array(self, system_prompt: str, prompt: str, schema: type[T]) -> list[T]:
        """
        Generate a list of objects, each conforming to ``schema``.

        Raises:
            GenerationFailed: On any invocation fault or non-conforming output
        """
        schema_name = f"{schema.__name__}Array"
        content = await self._invoke(system_prompt, prompt, array_schema(schema), schema_name)

        elements = content.get(ARRAY_ENVELOPE_KEY) if isinstance(content, dict) else content
        if not isinstance(elements, list):
            raise GenerationFailed(
                "Model output is not an array", {"schema": schema_name}
            )

        try:
            return [schema.model_validate(element) for element in elements]
        except ValidationError as e:
            logger.warning("Model output failed validation", schema=schema_name, errors=e.error_count())
            raise GenerationFailed(
                "Model output does not match the requested schema",
                {"schema": schema_name, "errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e

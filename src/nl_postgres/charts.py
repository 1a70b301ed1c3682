"""
Chart Config Synthesizer
========================

Infers a chart configuration from a result set and the original request,
then assigns series colors deterministically.

Colors proposed by the model are always discarded. Without an explicit
palette the i-th y key gets the theme token ``hsl(var(--chart-{i + 1}))``,
which never repeats. With an explicit palette it gets
``palette[i % len(palette)]``. Either way the same key ordering always yields
the same colors regardless of what the model suggested.
"""

import json
from typing import Sequence

import structlog

from nl_postgres.exceptions import ChartGenerationFailed, GenerationFailed
from nl_postgres.generation import StructuredGenerator
from nl_postgres.models import ResultRow
from nl_postgres.prompts import CHART_PROMPT_TEMPLATE, CHART_SYSTEM_PROMPT
from nl_postgres.schemas import ChartConfig, ChartSuggestion

logger = structlog.get_logger(__name__)


def theme_color(index: int) -> str:
    """Theme color token for the series at ``index`` (zero-based)."""
    return f"hsl(var(--chart-{index + 1}))"


# The first five theme tokens, as defined by the default stylesheet
DEFAULT_PALETTE: tuple[str, ...] = tuple(theme_color(i) for i in range(5))


def assign_colors(
    y_keys: Sequence[str], palette: Sequence[str] | None = None
) -> dict[str, str]:
    """Map each y key to the color at its position."""
    if palette is None:
        return {key: theme_color(index) for index, key in enumerate(y_keys)}
    return {key: palette[index % len(palette)] for index, key in enumerate(y_keys)}


def serialize_rows(rows: Sequence[ResultRow]) -> str:
    """Render rows as JSON for the prompt; decimals and dates become strings."""
    return json.dumps(list(rows), indent=2, default=str)


class ChartSynthesizer:
    """Builds a ChartConfig for a result set."""

    SYSTEM_PROMPT = CHART_SYSTEM_PROMPT

    def __init__(
        self,
        generator: StructuredGenerator,
        palette: Sequence[str] | None = None,
    ) -> None:
        if palette is not None and not palette:
            raise ValueError("palette must contain at least one color")
        self.generator = generator
        self.palette = tuple(palette) if palette is not None else None

    def _check_columns(self, suggestion: ChartSuggestion, rows: Sequence[ResultRow]) -> None:
        columns = set(rows[0])
        unknown = [
            key for key in [suggestion.x_key, *suggestion.y_keys] if key not in columns
        ]
        if unknown:
            raise ChartGenerationFailed(
                f"Chart references columns not in the result: {', '.join(unknown)}",
                {"unknown_keys": unknown, "columns": sorted(columns)},
            )

    async def synthesize(self, rows: Sequence[ResultRow], request: str) -> ChartConfig:
        """
        Generate a chart configuration for ``rows``.

        Raises:
            ChartGenerationFailed: If generation fails, the rows are empty, or
                the suggested config does not fit the result columns
        """
        if not rows:
            raise ChartGenerationFailed("Cannot chart an empty result set")

        prompt = CHART_PROMPT_TEMPLATE.format(request=request, data=serialize_rows(rows))
        try:
            suggestion = await self.generator.generate_object(
                self.SYSTEM_PROMPT, prompt, ChartSuggestion
            )
        except GenerationFailed as e:
            logger.error("Chart generation failed", cause=e.message)
            raise ChartGenerationFailed(context=e.context) from e

        self._check_columns(suggestion, rows)

        config = ChartConfig.model_validate(
            {
                **suggestion.model_dump(exclude={"colors"}),
                "colors": assign_colors(suggestion.y_keys, self.palette),
            }
        )
        logger.info(
            "Chart config generated",
            type=config.type.value,
            x_key=config.x_key,
            y_keys=config.y_keys,
        )
        return config

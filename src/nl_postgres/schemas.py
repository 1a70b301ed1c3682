"""
Generation Schemas
==================

Pydantic models describing the structured output requested from the model.
Their JSON schemas are sent to the provider, and the raw output is validated
against them before anything downstream sees it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeneratedQuery(BaseModel):
    """Output of the query generator: a single SQL string."""

    query: str = Field(..., description="The PostgreSQL SELECT query")


class ExplanationSegment(BaseModel):
    """A literal fragment of the query paired with its explanation."""

    segment: str = Field(..., description="A section of the SQL query, copied verbatim")
    explanation: str = Field(
        default="",
        description="Explanation of this section. Empty when there is nothing to explain.",
    )


class ChartType(str, Enum):
    """Supported chart types."""

    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"
    SCATTER = "scatter"


class ChartSuggestion(BaseModel):
    """Chart configuration as proposed by the model, before colors are assigned."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = Field(
        default="",
        description="Describe the chart. What is it showing? What is interesting about the way the data is displayed?",
    )
    takeaway: str = Field(default="", description="What is the main takeaway from the chart?")
    type: ChartType = Field(..., description="Type of chart")
    title: str = Field(default="")
    x_key: str = Field(..., alias="xKey", description="Key for x-axis or category")
    y_keys: list[str] = Field(
        ...,
        alias="yKeys",
        min_length=1,
        description="Key(s) for y-axis values, typically the quantitative columns",
    )
    multiple_lines: Optional[bool] = Field(
        default=None,
        alias="multipleLines",
        description="For line charts only: whether the chart is comparing groups of data.",
    )
    measurement_column: Optional[str] = Field(
        default=None,
        alias="measurementColumn",
        description="For line charts only: key for the quantitative y-axis column to measure against",
    )
    line_categories: Optional[list[str]] = Field(
        default=None,
        alias="lineCategories",
        description="For line charts only: categories used to compare different lines or data series.",
    )
    colors: Optional[dict[str, str]] = Field(
        default=None,
        description="Mapping of data keys to color values for chart elements",
    )
    legend: bool = Field(..., description="Whether to show legend")

    @field_validator("y_keys")
    @classmethod
    def dedupe_y_keys(cls, value: list[str]) -> list[str]:
        """Collapse repeated keys, keeping first-seen order."""
        return list(dict.fromkeys(value))


class ChartConfig(ChartSuggestion):
    """Final chart configuration with deterministically assigned colors."""

    colors: dict[str, str]

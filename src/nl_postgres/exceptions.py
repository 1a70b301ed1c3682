"""
Exceptions
==========

Error taxonomy for the insights pipeline.

Every error carries a human-readable message plus a context dict, so the
API layer can render an actionable response without inspecting tracebacks.
"""

from typing import Any


class NLPostgresError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as a JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class NotReadOnly(NLPostgresError):
    """The query was rejected by the safety gate."""

    def __init__(self, query: str, reason: str | None = None) -> None:
        message = reason or "Only SELECT queries are allowed"
        super().__init__(message, {"query": query})
        self.query = query
        self.reason = reason


class MissingRelation(NLPostgresError):
    """The dataset table does not exist; the database has not been provisioned."""

    def __init__(self, detail: str) -> None:
        super().__init__("Table does not exist", {"detail": detail})
        self.detail = detail


class ExecutionFailed(NLPostgresError):
    """The storage engine failed to run an approved query."""

    def __init__(self, detail: str, sqlstate: str | None = None) -> None:
        super().__init__(
            f"Query execution failed: {detail}",
            {"detail": detail, "sqlstate": sqlstate},
        )
        self.detail = detail
        self.sqlstate = sqlstate


class GenerationFailed(NLPostgresError):
    """The model could not produce output conforming to the requested schema."""

    default_message = "Failed to generate structured output"

    def __init__(self, message: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message or self.default_message, context)


class QueryGenerationFailed(GenerationFailed):
    """Query generation failed."""

    default_message = "Failed to generate query"


class ExplanationFailed(GenerationFailed):
    """Query explanation failed."""

    default_message = "Failed to explain query"


class ChartGenerationFailed(GenerationFailed):
    """Chart configuration could not be generated or did not fit the data."""

    default_message = "Failed to generate chart suggestion"

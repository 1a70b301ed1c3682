"""
Observability Module
====================

Metrics, tracing, and structured logging.
"""

from observability.metrics import setup_metrics, track_operation
from observability.tracing import setup_tracing
from observability.logging_config import setup_logging, get_logger, bind_context

__all__ = [
    "setup_metrics",
    "track_operation",
    "setup_tracing",
    "setup_logging",
    "get_logger",
    "bind_context",
]

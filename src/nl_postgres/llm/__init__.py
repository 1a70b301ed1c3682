"""
LLM Module
==========

Pluggable structured-output LLM providers.
"""

from nl_postgres.llm.base import StructuredLLM
from nl_postgres.llm.mock import MockLLM
from nl_postgres.llm.openai import OpenAIStructuredLLM

__all__ = [
    "StructuredLLM",
    "MockLLM",
    "OpenAIStructuredLLM",
]

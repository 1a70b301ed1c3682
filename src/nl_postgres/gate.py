"""
Execution Gate
==============

Deterministic safety check plus the single execution call for a candidate
query. The gate fails closed: a query reaches the storage engine only after
every verifier in the chain has passed it.
"""

import re
from typing import Any, Callable, Protocol, Sequence

import structlog

from nl_postgres.exceptions import ExecutionFailed, MissingRelation, NotReadOnly
from nl_postgres.models import ResultRow, SafetyVerdict
from nl_postgres.verifiers.base import VerificationChain

logger = structlog.get_logger(__name__)

# SQLSTATE for undefined_table
UNDEFINED_TABLE = "42P01"
MISSING_RELATION_PATTERN = re.compile(r'relation "[^"]+" does not exist')


class QueryExecutor(Protocol):
    """Anything that can run a statement and return rows."""

    async def query(self, sql: str, params: Sequence[Any] | None = None) -> list[ResultRow]:
        ...


def is_missing_relation(error: Exception) -> bool:
    """Whether a storage failure means the target table is absent."""
    if getattr(error, "sqlstate", None) == UNDEFINED_TABLE:
        return True
    return MISSING_RELATION_PATTERN.search(str(error)) is not None


class ExecutionGate:
    """Validates and executes a single read-only query."""

    def __init__(
        self,
        storage: QueryExecutor,
        verification_chain: VerificationChain | None = None,
        on_verdict: Callable[[SafetyVerdict], None] | None = None,
    ) -> None:
        """
        Args:
            storage: Executes approved statements
            verification_chain: Verifiers a query must pass; read-only by default
            on_verdict: Called with every verdict reached by ``execute``
        """
        self.storage = storage
        self.verification_chain = verification_chain or VerificationChain()
        self.on_verdict = on_verdict

    def check(self, candidate: str) -> SafetyVerdict:
        """Return the safety verdict for a candidate query without running it."""
        passed, results = self.verification_chain.run(candidate, {})
        if passed:
            return SafetyVerdict(allowed=True, results=tuple(results))
        return SafetyVerdict(
            allowed=False,
            reason=results[-1].message,
            results=tuple(results),
            kind=NotReadOnly.__name__,
        )

    async def execute(self, candidate: str) -> list[ResultRow]:
        """
        Gate and run a query.

        The original, non-normalized string is submitted verbatim, exactly
        once. Rejected queries never reach the storage engine.

        Raises:
            NotReadOnly: The query failed the safety gate
            MissingRelation: The dataset table has not been provisioned
            ExecutionFailed: Any other storage failure
        """
        verdict = self.check(candidate)
        if self.on_verdict is not None:
            self.on_verdict(verdict)
        if not verdict.allowed:
            logger.warning(
                "Query rejected by safety gate",
                reason=verdict.reason,
                verifier=verdict.results[-1].verifier_name,
            )
            raise NotReadOnly(candidate, verdict.reason)

        try:
            rows = await self.storage.query(candidate)
        except Exception as e:
            if is_missing_relation(e):
                logger.warning("Dataset table does not exist", detail=str(e))
                raise MissingRelation(str(e)) from e
            raise ExecutionFailed(str(e), sqlstate=getattr(e, "sqlstate", None)) from e

        logger.info("Query executed", row_count=len(rows))
        return rows

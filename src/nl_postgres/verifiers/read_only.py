"""
Read-Only Verifier
==================

Ensures the query is a SELECT statement.
"""

from nl_postgres.models import VerificationResult, VerificationStatus
from nl_postgres.verifiers.base import Verifier, normalize


class ReadOnlyVerifier(Verifier):
    """Rejects anything that does not start with the SELECT keyword."""

    READ_ONLY_KEYWORD = "select"

    @property
    def name(self) -> str:
        return "ReadOnlyVerifier"

    def verify(self, sql: str, context: dict) -> VerificationResult:
        if not normalize(sql).startswith(self.READ_ONLY_KEYWORD):
            return VerificationResult(
                verifier_name=self.name,
                status=VerificationStatus.FAILED,
                message="Only SELECT queries are allowed",
            )

        return VerificationResult(
            verifier_name=self.name,
            status=VerificationStatus.PASSED,
            message="Query is a SELECT statement",
        )

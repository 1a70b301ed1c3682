"""
Mutation Keyword Verifier
=========================

Deny-list check for data- or schema-mutating keywords.

Matching is a plain substring search over the lowercased query, with no
token boundaries and no awareness of string literals. A query such as
``select * from unicorns where company = 'dropbox'`` is rejected because it
contains ``drop``. This over-rejection is accepted; the gate is a deny-list,
not a SQL parser.
"""

from nl_postgres.models import VerificationResult, VerificationStatus
from nl_postgres.verifiers.base import Verifier, normalize


class MutationKeywordVerifier(Verifier):
    """Rejects queries containing any mutating keyword anywhere in the text."""

    MUTATING_KEYWORDS = (
        "drop",
        "delete",
        "insert",
        "update",
        "alter",
        "truncate",
        "create",
        "grant",
        "revoke",
    )

    @property
    def name(self) -> str:
        return "MutationKeywordVerifier"

    def verify(self, sql: str, context: dict) -> VerificationResult:
        """
        Verify SQL contains none of the mutating keywords.

        Args:
            sql: SQL query to validate
            context: Additional context (unused for this verifier)

        Returns:
            VerificationResult with PASSED or FAILED status
        """
        normalized = normalize(sql)
        found = [kw for kw in self.MUTATING_KEYWORDS if kw in normalized]

        if found:
            return VerificationResult(
                verifier_name=self.name,
                status=VerificationStatus.FAILED,
                message="Only SELECT queries are allowed",
                details={"keywords": found},
            )

        return VerificationResult(
            verifier_name=self.name,
            status=VerificationStatus.PASSED,
            message="No mutating keywords detected",
        )

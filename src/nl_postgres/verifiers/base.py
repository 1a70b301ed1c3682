"""
Base Verifier Classes
=====================

Abstract base class and verification chain implementation.
"""

from abc import ABC, abstractmethod

from nl_postgres.models import VerificationResult, VerificationStatus


def normalize(sql: str) -> str:
    """Return the trimmed, lowercased copy of a query used for matching."""
    return sql.strip().lower()


class Verifier(ABC):
    """Base class for all verifiers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this verifier."""
        pass

    @abstractmethod
    def verify(self, sql: str, context: dict) -> VerificationResult:
        """
        Verify the SQL against this verifier's rules.

        Args:
            sql: The SQL query to verify
            context: Additional context (original request, etc.)

        Returns:
            VerificationResult indicating pass/fail with details
        """
        pass


class VerificationChain:
    """Runs verifiers in sequence, stopping at the first failure."""

    def __init__(self, verifiers: list[Verifier] | None = None) -> None:
        """
        Initialize the verification chain.

        Args:
            verifiers: List of verifiers to run. Defaults to the read-only chain.
        """
        if verifiers is not None:
            self.verifiers = verifiers
        else:
            # Lazy import to avoid circular imports
            from nl_postgres.verifiers.keywords import MutationKeywordVerifier
            from nl_postgres.verifiers.read_only import ReadOnlyVerifier

            self.verifiers = [
                ReadOnlyVerifier(),
                MutationKeywordVerifier(),
            ]

    def run(self, sql: str, context: dict) -> tuple[bool, list[VerificationResult]]:
        """
        Run all verifiers. Returns (all_passed, results).

        Args:
            sql: The SQL query to verify
            context: Additional context for verification

        Returns:
            Tuple of (success, list of verification results)
        """
        results = []

        for verifier in self.verifiers:
            result = verifier.verify(sql, context)
            results.append(result)

            if result.status == VerificationStatus.FAILED:
                return False, results

        return True, results

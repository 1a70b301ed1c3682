"""
Verifiers Module
================

Deny-list verification chain backing the execution gate.
"""

from nl_postgres.verifiers.base import Verifier, VerificationChain, normalize
from nl_postgres.verifiers.keywords import MutationKeywordVerifier
from nl_postgres.verifiers.read_only import ReadOnlyVerifier

__all__ = [
    "Verifier",
    "VerificationChain",
    "normalize",
    "ReadOnlyVerifier",
    "MutationKeywordVerifier",
]

"""
Verifier Module - Stateless fairness checks anyone can run.

Takes the revealed inputs of a round and answers two separate questions:
was the seed the one committed to, and was the outcome derived from it.
"""

from .verify import (
    VerificationData,
    VerificationResult,
    VerificationFailure,
    verify_outcome,
    verify_slot_outcome,
    verify_shuffled_deck,
    verify_deck_hash,
)

__all__ = [
    "VerificationData",
    "VerificationResult",
    "VerificationFailure",
    "verify_outcome",
    "verify_slot_outcome",
    "verify_shuffled_deck",
    "verify_deck_hash",
]

"""
Verifier - Independent recomputation of commitments and outcomes.

Given the revealed server seed, the published hash, the client seed, the
nonce and a claimed result, verification:
1. Recomputes commit(server_seed) and compares it to the published hash.
   A mismatch means the seed was swapped; stop there.
2. Regenerates the outcome with the same extractor used at play time and
   compares it to the claim. A mismatch means the outcome was altered.

Verification is called with adversarial data as a matter of course, so it
never raises for bad input. Every problem is reported in the result.
"""

from __future__ import annotations
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..engine_core.errors import FairEngineError, OutcomeMismatch, TamperedSeed, ValidationError
from ..engine_core.extractors import (
    DEFAULT_RANGE,
    generate_outcome,
    generate_shuffled_deck,
    generate_slot_outcome,
    hash_deck,
)
from ..engine_core.seeds import commit

TAMPERED_REASON = "Server seed does not match committed hash - possible tampering"


class VerificationFailure(str, Enum):
    TAMPERED_SEED = "tampered_seed"
    OUTCOME_MISMATCH = "outcome_mismatch"
    INVALID_INPUT = "invalid_input"


@dataclass
class VerificationData:
    """A numeric claim to be checked."""
    server_seed: str
    server_seed_hash: str
    client_seed: str
    nonce: int
    claimed_outcome: int


@dataclass
class VerificationResult:
    """Outcome of a verification run. Computed on demand, never stored."""
    is_valid: bool
    hash_match: bool
    regenerated_outcome: Any = None
    reason: str | None = None
    failure: VerificationFailure | None = None

    def raise_for_failure(self):
        """Raise the matching engine error if verification failed."""
        if self.is_valid:
            return
        if self.failure == VerificationFailure.TAMPERED_SEED:
            raise TamperedSeed(self.reason or TAMPERED_REASON)
        if self.failure == VerificationFailure.INVALID_INPUT:
            raise ValidationError(self.reason or "Invalid verification input")
        raise OutcomeMismatch(self.reason or "Outcome does not match")

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "hash_match": self.hash_match,
            "regenerated_outcome": self.regenerated_outcome,
            "reason": self.reason,
            "failure": self.failure.value if self.failure else None,
        }


def _hash_matches(server_seed: str, server_seed_hash: Any) -> bool:
    if not isinstance(server_seed_hash, str):
        return False
    return commit(server_seed) == server_seed_hash.lower()


def _claimed_ints(values: Any) -> list[int]:
    """Claimed cards or reels as a list; bools are not numbers here."""
    claimed = list(values)
    if any(isinstance(v, bool) for v in claimed):
        raise TypeError("boolean in claimed values")
    return claimed


def _verify(
    server_seed: Any,
    server_seed_hash: Any,
    regenerate: Callable[[], Any],
    matches: Callable[[Any], bool],
    mismatch_reason: str,
) -> VerificationResult:
    try:
        hash_match = _hash_matches(server_seed, server_seed_hash)
    except ValidationError as e:
        return VerificationResult(
            is_valid=False,
            hash_match=False,
            reason=e.message,
            failure=VerificationFailure.INVALID_INPUT,
        )

    if not hash_match:
        return VerificationResult(
            is_valid=False,
            hash_match=False,
            reason=TAMPERED_REASON,
            failure=VerificationFailure.TAMPERED_SEED,
        )

    try:
        regenerated = regenerate()
    except FairEngineError as e:
        return VerificationResult(
            is_valid=False,
            hash_match=True,
            reason=e.message,
            failure=VerificationFailure.INVALID_INPUT,
        )

    try:
        outcome_match = matches(regenerated)
    except (TypeError, ValueError):
        # Claim has the wrong shape (e.g. reels=None); it cannot match
        outcome_match = False

    if not outcome_match:
        return VerificationResult(
            is_valid=False,
            hash_match=True,
            regenerated_outcome=regenerated,
            reason=mismatch_reason,
            failure=VerificationFailure.OUTCOME_MISMATCH,
        )

    return VerificationResult(is_valid=True, hash_match=True, regenerated_outcome=regenerated)


def verify_outcome(claim: VerificationData, range: int = DEFAULT_RANGE) -> VerificationResult:
    """Verify a numeric outcome produced by generate_outcome."""
    return _verify(
        claim.server_seed,
        claim.server_seed_hash,
        lambda: generate_outcome(
            claim.server_seed, claim.client_seed, claim.nonce, range
        ).outcome,
        lambda regenerated: (
            not isinstance(claim.claimed_outcome, bool)
            and regenerated == claim.claimed_outcome
        ),
        "Regenerated outcome does not match claimed outcome",
    )


def verify_slot_outcome(
    server_seed: str,
    server_seed_hash: str,
    client_seed: str,
    nonce: int,
    claimed_reels: Sequence[int],
) -> VerificationResult:
    """Verify the three reel digits of a slot spin."""
    return _verify(
        server_seed,
        server_seed_hash,
        lambda: list(generate_slot_outcome(server_seed, client_seed, nonce).reels),
        lambda regenerated: regenerated == _claimed_ints(claimed_reels),
        "Reel values do not match - outcome does not match seeds and nonce",
    )


def verify_shuffled_deck(
    server_seed: str,
    server_seed_hash: str,
    client_seed: str,
    nonce: int,
    claimed_deck: Sequence[int],
) -> VerificationResult:
    """Verify a full 52-card permutation."""
    return _verify(
        server_seed,
        server_seed_hash,
        lambda: generate_shuffled_deck(server_seed, client_seed, nonce),
        lambda regenerated: regenerated == _claimed_ints(claimed_deck),
        "Deck does not match - outcome does not match seeds and nonce",
    )


def verify_deck_hash(
    server_seed: str,
    server_seed_hash: str,
    client_seed: str,
    nonce: int,
    claimed_deck_hash: str,
    revealed_prefix: Sequence[int] | None = None,
) -> VerificationResult:
    """
    Verify a deck that was only partially revealed during play.

    The regenerated deck must hash to the published deck hash and, when
    given, start with the cards that were shown.
    """
    def matches(regenerated: list[int]) -> bool:
        prefix = _claimed_ints(revealed_prefix) if revealed_prefix is not None else []
        if not isinstance(claimed_deck_hash, str):
            return False
        if hash_deck(regenerated) != claimed_deck_hash.lower():
            return False
        return regenerated[:len(prefix)] == prefix

    return _verify(
        server_seed,
        server_seed_hash,
        lambda: generate_shuffled_deck(server_seed, client_seed, nonce),
        matches,
        "Deck hash or revealed cards do not match - outcome does not match seeds and nonce",
    )

"""
Outcomes - Closed set of game results derived from the byte stream.

An Outcome is exactly one of:
- NumericOutcome: uniform integer in [0, range]
- SlotOutcome: three reel digits plus a win signal
- DeckOutcome: a permutation of the 52 card indices

Outcomes are frozen, pure data. They carry no identity and are fully
determined by (server_seed, client_seed, nonce).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Union

DECK_SIZE = 52


@dataclass(frozen=True)
class NumericOutcome:
    value: int
    range: int
    hmac: str

    kind = "numeric"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value, "range": self.range, "hmac": self.hmac}


@dataclass(frozen=True)
class SlotOutcome:
    reels: tuple[int, int, int]
    multiplier: int
    is_win: bool
    hmac: str

    kind = "slots"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "reels": list(self.reels),
            "multiplier": self.multiplier,
            "is_win": self.is_win,
            "hmac": self.hmac,
        }


@dataclass(frozen=True)
class DeckOutcome:
    deck: tuple[int, ...]
    deck_hash: str

    kind = "deck"

    def reveal(self, count: int) -> list[int]:
        """The first `count` cards; the rest stay committed behind deck_hash."""
        return list(self.deck[:max(count, 0)])

    def to_dict(self, reveal: int | None = None) -> dict[str, Any]:
        cards = list(self.deck) if reveal is None else self.reveal(reveal)
        return {
            "kind": self.kind,
            "deck": cards,
            "deck_hash": self.deck_hash,
            "revealed": len(cards),
        }


Outcome = Union[NumericOutcome, SlotOutcome, DeckOutcome]


@dataclass(frozen=True)
class FairRandomResult:
    """
    Full audit bundle for a numeric draw.

    Everything a third party needs to recompute the draw once the server
    seed is revealed.
    """
    outcome: int
    range: int
    hmac: str
    server_seed: str
    server_seed_hash: str
    client_seed: str
    nonce: int

    def as_outcome(self) -> NumericOutcome:
        return NumericOutcome(value=self.outcome, range=self.range, hmac=self.hmac)

    def __repr__(self) -> str:
        return (
            f"FairRandomResult(outcome={self.outcome}, range={self.range}, "
            f"nonce={self.nonce}, server_seed_hash={self.server_seed_hash!r})"
        )

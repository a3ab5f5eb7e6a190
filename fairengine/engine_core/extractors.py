"""
Outcome Extractors - Pure functions from the byte stream to game results.

Bias handling:
- Numeric and slot outcomes use division-based scaling of a 32-bit draw,
  floor(v / 2**32 * n), computed exactly as (v * n) >> 32. This avoids the
  modulo skew of v % n; the residual non-uniformity is below n / 2**32.
- The deck shuffle uses rejection sampling, so every one of the 52!
  permutations is exactly equally likely.

Extractors read only the stream. No clocks, counters or shared state.
"""

from __future__ import annotations
import hashlib
from collections.abc import Iterable

from .encoding import bytes_to_hex, read_uint32_be
from .outcomes import DECK_SIZE, DeckOutcome, FairRandomResult, SlotOutcome
from .seeds import commit
from .stream import ByteStream, hmac_block
from .validation import require_nonce, require_range, require_seed

DEFAULT_RANGE = 100
SLOT_REELS = 3
SLOT_SYMBOLS = 10

# Raw win signals only; payout economics live outside the engine.
TRIPLE_MULTIPLIERS = (10, 12, 15, 20, 25, 30, 40, 50, 75, 100)
PAIR_MULTIPLIER = 2


def _check_inputs(server_seed: str, client_seed: str, nonce: int):
    require_seed("server_seed", server_seed)
    require_seed("client_seed", client_seed)
    require_nonce(nonce)


def scale_uint32(value: int, buckets: int) -> int:
    """Map a 32-bit draw onto [0, buckets) by division, not modulo."""
    return (value * buckets) >> 32


def generate_outcome(
    server_seed: str,
    client_seed: str,
    nonce: int,
    range: int = DEFAULT_RANGE,
) -> FairRandomResult:
    """
    Uniform integer in [0, range] inclusive.

    Uses the first 4 bytes of block 0 as a big-endian uint32.
    """
    _check_inputs(server_seed, client_seed, nonce)
    require_range(range)

    block = hmac_block(server_seed, client_seed, nonce, 0)
    value = scale_uint32(read_uint32_be(block), range + 1)

    return FairRandomResult(
        outcome=value,
        range=range,
        hmac=bytes_to_hex(block),
        server_seed=server_seed,
        server_seed_hash=commit(server_seed),
        client_seed=client_seed,
        nonce=nonce,
    )


def slot_multiplier(reels: tuple[int, int, int]) -> int:
    a, b, c = reels
    if a == b == c:
        return TRIPLE_MULTIPLIERS[a]
    if a == b or b == c or a == c:
        return PAIR_MULTIPLIER
    return 0


def generate_slot_outcome(server_seed: str, client_seed: str, nonce: int) -> SlotOutcome:
    """
    Three reels, each a digit in [0, 9].

    Reel i is taken from block i so the reels never share bytes.
    """
    _check_inputs(server_seed, client_seed, nonce)

    blocks = [hmac_block(server_seed, client_seed, nonce, i) for i in range(SLOT_REELS)]
    reels = tuple(scale_uint32(read_uint32_be(block), SLOT_SYMBOLS) for block in blocks)

    return SlotOutcome(
        reels=reels,
        multiplier=slot_multiplier(reels),
        is_win=reels[0] == reels[1] == reels[2],
        hmac=bytes_to_hex(blocks[0]),
    )


def _uniform_index(stream: ByteStream, upper: int) -> int:
    """
    Exactly uniform integer in [0, upper] by rejection sampling.

    Draws are masked to the smallest power of two covering upper; anything
    above upper is discarded and a fresh draw is taken from the stream.
    """
    bits = upper.bit_length()
    mask = (1 << bits) - 1
    width = (bits + 7) // 8
    while True:
        candidate = int.from_bytes(stream.read(width), "big") & mask
        if candidate <= upper:
            return candidate


def generate_shuffled_deck(server_seed: str, client_seed: str, nonce: int) -> list[int]:
    """Fisher-Yates permutation of 0..51 driven by a single byte stream."""
    _check_inputs(server_seed, client_seed, nonce)

    deck = list(range(DECK_SIZE))
    stream = ByteStream(server_seed, client_seed, nonce)
    for i in range(DECK_SIZE - 1, 0, -1):
        j = _uniform_index(stream, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def hash_deck(deck: Iterable[int]) -> str:
    """SHA-256 over the two-digit padded card values, concatenated."""
    payload = "".join(f"{card:02d}" for card in deck)
    return hashlib.sha256(payload.encode("ascii")).hexdigest()


def deal_deck(server_seed: str, client_seed: str, nonce: int) -> DeckOutcome:
    """Shuffled deck bundled with its commitment hash."""
    deck = generate_shuffled_deck(server_seed, client_seed, nonce)
    return DeckOutcome(deck=tuple(deck), deck_hash=hash_deck(deck))

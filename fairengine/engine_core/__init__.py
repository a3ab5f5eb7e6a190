"""
Engine Core - Provably fair randomness.

The core is the pure, stateless part of the engine:
1. Generates server/client seeds and the SHA-256 commitment
2. Expands (server_seed, client_seed, nonce) into an HMAC byte stream
3. Extracts numeric, slot and deck outcomes from the stream

Nothing here touches clocks, sessions or I/O, so every function is safe to
call from any number of threads.
"""

from .encoding import bytes_to_hex, is_valid_hex, read_uint32_be
from .errors import (
    FairEngineError,
    ValidationError,
    SessionNotFound,
    SessionExpired,
    SessionLimitReached,
    TamperedSeed,
    OutcomeMismatch,
    EntropyFailure,
)
from .seeds import new_server_seed, new_client_seed, new_seed_pair, commit, hash_server_seed
from .stream import ByteStream, hmac_block
from .outcomes import Outcome, NumericOutcome, SlotOutcome, DeckOutcome, FairRandomResult
from .extractors import (
    generate_outcome,
    generate_slot_outcome,
    generate_shuffled_deck,
    deal_deck,
    hash_deck,
)

__all__ = [
    "bytes_to_hex",
    "is_valid_hex",
    "read_uint32_be",
    "FairEngineError",
    "ValidationError",
    "SessionNotFound",
    "SessionExpired",
    "SessionLimitReached",
    "TamperedSeed",
    "OutcomeMismatch",
    "EntropyFailure",
    "new_server_seed",
    "new_client_seed",
    "new_seed_pair",
    "commit",
    "hash_server_seed",
    "ByteStream",
    "hmac_block",
    "Outcome",
    "NumericOutcome",
    "SlotOutcome",
    "DeckOutcome",
    "FairRandomResult",
    "generate_outcome",
    "generate_slot_outcome",
    "generate_shuffled_deck",
    "deal_deck",
    "hash_deck",
]

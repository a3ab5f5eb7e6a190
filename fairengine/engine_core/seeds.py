"""
Seeds & Commitment - Server/client seed generation and the SHA-256 commitment.

The server seed is drawn from the OS CSPRNG and published only as its hash
until a play reveals it. Nothing in this module keeps state.
"""

from __future__ import annotations
import hashlib
import secrets

from .encoding import bytes_to_hex
from .errors import EntropyFailure
from .validation import require_seed

SERVER_SEED_BYTES = 32  # 256 bits
CLIENT_SEED_BYTES = 16  # 128 bits


def _random_bytes(n: int) -> bytes:
    try:
        return secrets.token_bytes(n)
    except (OSError, NotImplementedError) as e:
        raise EntropyFailure(f"OS entropy source unavailable: {e}") from e


def new_server_seed() -> str:
    """Fresh 64-char hex server seed."""
    return bytes_to_hex(_random_bytes(SERVER_SEED_BYTES))


def new_client_seed() -> str:
    """Fresh 32-char hex client seed, for callers without their own entropy."""
    return bytes_to_hex(_random_bytes(CLIENT_SEED_BYTES))


def commit(seed: str) -> str:
    """SHA-256 of the seed string's bytes, lowercase hex."""
    require_seed("server_seed", seed)
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()


hash_server_seed = commit


def new_seed_pair() -> tuple[str, str]:
    """Return (server_seed, server_seed_hash)."""
    seed = new_server_seed()
    return seed, commit(seed)

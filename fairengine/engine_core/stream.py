"""
Byte Stream - Deterministic HMAC-SHA256 expansion of (server, client, nonce).

Block k of the stream is:

    HMAC-SHA256(key=server_seed, msg=f"{client_seed}:{nonce}:{k}")

Each block yields 32 bytes. Consumers that need more entropy than one
block keep reading and the stream derives block k+1, k+2, ... on demand.

The server seed is the HMAC key, so the caller-controlled parts (client
seed, nonce) only ever appear in the message.

Streams are never cached or shared: every extractor builds its own from
scratch so verification follows exactly the same path as generation.
"""

from __future__ import annotations
import hashlib
import hmac

BLOCK_SIZE = 32


def stream_message(client_seed: str, nonce: int, block_index: int) -> bytes:
    """The HMAC message for one block."""
    return f"{client_seed}:{nonce}:{block_index}".encode("utf-8")


def hmac_block(server_seed: str, client_seed: str, nonce: int, block_index: int) -> bytes:
    """Derive a single 32-byte block."""
    return hmac.new(
        server_seed.encode("utf-8"),
        stream_message(client_seed, nonce, block_index),
        hashlib.sha256,
    ).digest()


class ByteStream:
    """
    Unbounded reproducible byte stream.

    Usage:
        stream = ByteStream(server_seed, client_seed, nonce)
        first_four = stream.read(4)
        next_byte = next(stream)
    """

    def __init__(self, server_seed: str, client_seed: str, nonce: int):
        self._server_seed = server_seed
        self._client_seed = client_seed
        self._nonce = nonce
        self._buffer = b""
        self._pos = 0
        self.blocks_used = 0

    def __repr__(self) -> str:
        # no server seed
        return f"ByteStream(nonce={self._nonce}, blocks_used={self.blocks_used})"

    def __iter__(self) -> ByteStream:
        return self

    def __next__(self) -> int:
        if self._pos >= len(self._buffer):
            self._pull_block()
        byte = self._buffer[self._pos]
        self._pos += 1
        return byte

    def read(self, n: int) -> bytes:
        """Return the next n bytes, deriving new blocks as needed."""
        if n < 0:
            raise ValueError("n must be >= 0")
        while len(self._buffer) - self._pos < n:
            self._pull_block()
        chunk = self._buffer[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def _pull_block(self):
        block = hmac_block(
            self._server_seed, self._client_seed, self._nonce, self.blocks_used
        )
        self.blocks_used += 1
        # Drop fully consumed bytes so the buffer stays small
        self._buffer = self._buffer[self._pos:] + block
        self._pos = 0

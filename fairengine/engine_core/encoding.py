"""
Encoding - Hex helpers shared by seeds, commitments and the byte stream.

All seeds and hashes leave the engine as lowercase hex with no separators.
"""

from __future__ import annotations
import re

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def bytes_to_hex(data: bytes | bytearray | list[int]) -> str:
    """Lowercase, zero-padded, two hex digits per byte."""
    return "".join(f"{byte:02x}" for byte in bytes(data))


def is_valid_hex(value: object, expected_len: int | None = None) -> bool:
    """
    Check that value is a non-empty hex string.

    Upper and lower case digits are both accepted. When expected_len is
    given, the string length must match it exactly.
    """
    if not isinstance(value, str) or not _HEX_RE.fullmatch(value):
        return False
    if expected_len is not None and len(value) != expected_len:
        return False
    return True


def read_uint32_be(data: bytes, offset: int = 0) -> int:
    """Read a big-endian unsigned 32-bit integer at offset."""
    if offset < 0 or offset + 4 > len(data):
        raise IndexError(f"need 4 bytes at offset {offset}, have {len(data)}")
    return int.from_bytes(data[offset:offset + 4], "big")

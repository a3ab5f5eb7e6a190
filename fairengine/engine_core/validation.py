"""
Input Validation - Guards run before any derivation or state change.

Each check raises ValidationError with the offending field in `details`.
"""

from __future__ import annotations
import math
from typing import Any

from .errors import ValidationError

CLIENT_SEED_MIN_LENGTH = 16
CLIENT_SEED_MAX_LENGTH = 64


def _require_encodable(name: str, value: str):
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(
            f"{name} must be valid UTF-8 text",
            details={"field": name},
        )


def require_seed(name: str, value: Any) -> str:
    """Seeds must be non-empty strings that encode as UTF-8."""
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"{name} must be a non-empty string",
            details={"field": name},
        )
    _require_encodable(name, value)
    return value


def require_nonce(value: Any) -> int:
    """Nonce must be an integer >= 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            "nonce must be a non-negative integer",
            details={"field": "nonce", "value": repr(value)},
        )
    return value


def require_range(value: Any) -> int:
    """Outcome range must be a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(
            "range must be a positive integer",
            details={"field": "range", "value": repr(value)},
        )
    return value


def require_client_seed(value: Any) -> str:
    """Client seeds are untrusted; only type and length are constrained."""
    if not isinstance(value, str):
        raise ValidationError(
            "client_seed must be a string",
            details={"field": "client_seed"},
        )
    if not CLIENT_SEED_MIN_LENGTH <= len(value) <= CLIENT_SEED_MAX_LENGTH:
        raise ValidationError(
            f"client_seed must be {CLIENT_SEED_MIN_LENGTH}-{CLIENT_SEED_MAX_LENGTH} characters",
            details={"field": "client_seed", "length": len(value)},
        )
    _require_encodable("client_seed", value)
    return value


def require_bet_amount(value: Any) -> float | None:
    """Bet amount is optional metadata; when present it must be finite and >= 0."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            "bet_amount must be a number",
            details={"field": "bet_amount"},
        )
    if not math.isfinite(value) or value < 0:
        raise ValidationError(
            "bet_amount must be a finite number >= 0",
            details={"field": "bet_amount", "value": repr(value)},
        )
    return float(value)

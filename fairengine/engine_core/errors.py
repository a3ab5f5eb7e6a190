"""
Engine Errors - Typed failures raised by the fairness engine.

Every error carries a stable `code` so outer layers (HTTP, CLI) can map
failures without parsing messages.

Generation path is fail-closed: validation errors are raised before any
nonce increment or entropy draw. The verification path does not raise;
it reports these conditions inside a VerificationResult instead.
"""

from __future__ import annotations
from typing import Any


class FairEngineError(Exception):
    """Base class for all engine errors."""

    code = "ENGINE_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(FairEngineError):
    """Malformed seed, nonce, range or client seed. Caller's fault."""

    code = "VALIDATION_ERROR"


class SessionNotFound(FairEngineError):
    """No session is registered under the given id."""

    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Session not found: {session_id}",
            details={"session_id": session_id},
        )


class SessionExpired(FairEngineError):
    """Session exists but accepts no more plays."""

    code = "SESSION_EXPIRED"

    def __init__(self, session_id: str, message: str | None = None):
        self.session_id = session_id
        super().__init__(
            message or f"Session expired: {session_id}",
            details={"session_id": session_id},
        )


class SessionLimitReached(SessionExpired):
    """Session hit its maximum play count."""

    code = "SESSION_LIMIT_REACHED"

    def __init__(self, session_id: str, max_plays: int):
        self.max_plays = max_plays
        super().__init__(
            session_id,
            f"Session bet limit reached ({max_plays} plays). Start a new session.",
        )
        self.details["max_plays"] = max_plays


class TamperedSeed(FairEngineError):
    """Revealed server seed does not hash to the published commitment."""

    code = "TAMPERED_SEED"


class OutcomeMismatch(FairEngineError):
    """Commitment is honest but the claimed outcome was not derived from it."""

    code = "OUTCOME_MISMATCH"


class EntropyFailure(FairEngineError):
    """The OS CSPRNG is unavailable. Fatal, never retried."""

    code = "ENTROPY_FAILURE"

"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the request layer and the engine.
The server seed appears in exactly one response: PlayResponse, after the
outcome has been fixed.

Error Codes:
- VALIDATION_ERROR: Malformed seed, nonce, range, client seed or game type
- SESSION_NOT_FOUND: Session does not exist (or was swept)
- SESSION_EXPIRED: Session is past its max age and accepts no plays
- SESSION_LIMIT_REACHED: Session used all of its plays
- ENTROPY_FAILURE: Server randomness unavailable
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameTypeName(str, Enum):
    """Game types accepted at session start."""
    SLOTS = "slots"
    BLACKJACK = "blackjack"
    PREDICTION = "prediction"


class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    EXPIRED = "expired"


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    SESSION_LIMIT_REACHED = "SESSION_LIMIT_REACHED"
    ENTROPY_FAILURE = "ENTROPY_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class VerificationFailureCode(str, Enum):
    """Why a verification failed."""
    TAMPERED_SEED = "tampered_seed"
    OUTCOME_MISMATCH = "outcome_mismatch"
    INVALID_INPUT = "invalid_input"


# =============================================================================
# Outcome Models
# =============================================================================

class NumericOutcomeModel(BaseModel):
    """Uniform integer in [0, range]."""
    kind: Literal["numeric"] = "numeric"
    value: int
    range: int
    hmac: str = Field(..., description="Hex HMAC block the value was read from")


class SlotOutcomeModel(BaseModel):
    """Three reel digits plus the raw win signal."""
    kind: Literal["slots"] = "slots"
    reels: list[int] = Field(..., min_length=3, max_length=3)
    multiplier: int
    is_win: bool
    hmac: str


class DeckOutcomeModel(BaseModel):
    """Shuffled deck; blackjack plays reveal only a prefix."""
    kind: Literal["deck"] = "deck"
    deck: list[int] = Field(..., description="Revealed cards, in deal order")
    deck_hash: str = Field(..., description="SHA-256 commitment to the full deck")
    revealed: int


OutcomeModel = Annotated[
    Union[NumericOutcomeModel, SlotOutcomeModel, DeckOutcomeModel],
    Field(discriminator="kind"),
]


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a new game session."""
    game_type: GameTypeName = Field(..., description="slots, blackjack or prediction")


class PlayRequest(BaseModel):
    """Request to play one round in a session."""
    client_seed: str = Field(
        ..., min_length=16, max_length=64, description="Player-supplied seed"
    )
    bet_amount: Optional[float] = Field(None, ge=0, description="Bet metadata, logged only")


class SeedClaim(BaseModel):
    """Revealed inputs shared by every verification request."""
    server_seed: str = Field(..., description="Server seed revealed after play")
    server_seed_hash: str = Field(..., description="Commitment published at session start")
    client_seed: str
    nonce: int


class VerifyOutcomeRequest(SeedClaim):
    claimed_outcome: int
    range: int = Field(100, description="Upper bound the outcome was drawn with")


class VerifySlotsRequest(SeedClaim):
    claimed_reels: list[int]


class VerifyDeckRequest(SeedClaim):
    claimed_deck: list[int]


class VerifyDeckHashRequest(SeedClaim):
    claimed_deck_hash: str
    revealed_prefix: Optional[list[int]] = Field(
        None, description="Cards shown during play, checked as a prefix"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Returned at session start: the commitment, never the seed."""
    session_id: str
    server_seed_hash: str
    game_type: GameTypeName
    created_at: float
    api_version: str = "v1"


class SessionInfoResponse(BaseModel):
    """Public session state."""
    session_id: str
    game_type: GameTypeName
    status: SessionStatus
    server_seed_hash: str
    nonce: int
    bet_count: int
    created_at: float
    last_activity: float
    api_version: str = "v1"


class PlayResponse(BaseModel):
    """Outcome of one play, with the server seed revealed for verification."""
    session_id: str
    nonce: int
    server_seed: str
    outcome: OutcomeModel
    api_version: str = "v1"


class VerificationResponse(BaseModel):
    """Result of an independent verification."""
    is_valid: bool
    hash_match: bool
    regenerated_outcome: Optional[Any] = None
    reason: Optional[str] = None
    failure: Optional[VerificationFailureCode] = None
    api_version: str = "v1"


class ClientSeedResponse(BaseModel):
    client_seed: str


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str

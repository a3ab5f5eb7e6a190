"""
API Module - HTTP interface to the fairness engine.

Exposes the engine via REST API:
1. Start sessions and receive the server seed commitment
2. Play rounds and receive outcomes with the revealed seed
3. Verify any round independently

Run with: uvicorn fairengine.api.app:create_app --factory
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    PlayRequest,
    VerifyOutcomeRequest,
    VerifySlotsRequest,
    VerifyDeckRequest,
    VerifyDeckHashRequest,
    # Responses
    SessionResponse,
    SessionInfoResponse,
    PlayResponse,
    VerificationResponse,
    ErrorResponse,
    # Outcomes
    NumericOutcomeModel,
    SlotOutcomeModel,
    DeckOutcomeModel,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "PlayRequest",
    "VerifyOutcomeRequest",
    "VerifySlotsRequest",
    "VerifyDeckRequest",
    "VerifyDeckHashRequest",
    # Responses
    "SessionResponse",
    "SessionInfoResponse",
    "PlayResponse",
    "VerificationResponse",
    "ErrorResponse",
    # Outcomes
    "NumericOutcomeModel",
    "SlotOutcomeModel",
    "DeckOutcomeModel",
    # Service
    "APIService",
    "create_app",
]

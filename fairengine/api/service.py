"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates request schemas into SessionManager / verifier calls
2. Shapes outcomes for the wire (blackjack decks are only partly revealed)
3. Lets engine errors propagate; the app maps them to HTTP responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..engine_core.outcomes import DeckOutcome, NumericOutcome, Outcome, SlotOutcome
from ..engine_core.seeds import new_client_seed
from ..session import SessionManager, SessionConfig
from ..verifier import (
    VerificationData,
    VerificationResult,
    verify_outcome,
    verify_slot_outcome,
    verify_shuffled_deck,
    verify_deck_hash,
)
from .schemas import (
    CreateSessionRequest,
    PlayRequest,
    VerifyOutcomeRequest,
    VerifySlotsRequest,
    VerifyDeckRequest,
    VerifyDeckHashRequest,
    SessionResponse,
    SessionInfoResponse,
    PlayResponse,
    VerificationResponse,
    NumericOutcomeModel,
    SlotOutcomeModel,
    DeckOutcomeModel,
)

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest(game_type="slots"))
        play = service.play(session.session_id, PlayRequest(client_seed="..."))
        check = service.verify_slots(VerifySlotsRequest(...))
    """
    session_manager: SessionManager = field(
        default_factory=lambda: SessionManager(config=SessionConfig.from_env())
    )

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        ticket = self.session_manager.start_session(request.game_type.value)
        return SessionResponse(
            session_id=ticket.session_id,
            server_seed_hash=ticket.server_seed_hash,
            game_type=ticket.game_type.value,
            created_at=ticket.created_at,
        )

    def get_session(self, session_id: str) -> SessionInfoResponse:
        info = self.session_manager.get_session(session_id)
        return SessionInfoResponse(
            session_id=info.session_id,
            game_type=info.game_type.value,
            status=info.state.value,
            server_seed_hash=info.server_seed_hash,
            nonce=info.nonce,
            bet_count=info.bet_count,
            created_at=info.created_at,
            last_activity=info.last_activity,
        )

    def play(self, session_id: str, request: PlayRequest) -> PlayResponse:
        result = self.session_manager.play(
            session_id,
            client_seed=request.client_seed,
            bet_amount=request.bet_amount,
        )
        return PlayResponse(
            session_id=result.session_id,
            nonce=result.nonce,
            server_seed=result.server_seed,
            outcome=self._outcome_to_model(result.outcome),
        )

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    def new_client_seed(self) -> str:
        return new_client_seed()

    # =========================================================================
    # Verification
    # =========================================================================

    def verify_outcome(self, request: VerifyOutcomeRequest) -> VerificationResponse:
        result = verify_outcome(
            VerificationData(
                server_seed=request.server_seed,
                server_seed_hash=request.server_seed_hash,
                client_seed=request.client_seed,
                nonce=request.nonce,
                claimed_outcome=request.claimed_outcome,
            ),
            range=request.range,
        )
        return self._verification_to_response(result)

    def verify_slots(self, request: VerifySlotsRequest) -> VerificationResponse:
        result = verify_slot_outcome(
            request.server_seed,
            request.server_seed_hash,
            request.client_seed,
            request.nonce,
            request.claimed_reels,
        )
        return self._verification_to_response(result)

    def verify_deck(self, request: VerifyDeckRequest) -> VerificationResponse:
        result = verify_shuffled_deck(
            request.server_seed,
            request.server_seed_hash,
            request.client_seed,
            request.nonce,
            request.claimed_deck,
        )
        return self._verification_to_response(result)

    def verify_deck_hash(self, request: VerifyDeckHashRequest) -> VerificationResponse:
        result = verify_deck_hash(
            request.server_seed,
            request.server_seed_hash,
            request.client_seed,
            request.nonce,
            request.claimed_deck_hash,
            request.revealed_prefix,
        )
        return self._verification_to_response(result)

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _outcome_to_model(
        self, outcome: Outcome
    ) -> NumericOutcomeModel | SlotOutcomeModel | DeckOutcomeModel:
        if isinstance(outcome, NumericOutcome):
            return NumericOutcomeModel(**outcome.to_dict())
        if isinstance(outcome, SlotOutcome):
            return SlotOutcomeModel(**outcome.to_dict())
        if isinstance(outcome, DeckOutcome):
            reveal = self.session_manager.config.blackjack_reveal
            return DeckOutcomeModel(**outcome.to_dict(reveal=reveal))
        raise TypeError(f"Unsupported outcome type: {type(outcome).__name__}")

    @staticmethod
    def _verification_to_response(result: VerificationResult) -> VerificationResponse:
        if not result.is_valid:
            logger.info("Verification failed: %s", result.failure.value if result.failure else None)
        return VerificationResponse(**result.to_dict())

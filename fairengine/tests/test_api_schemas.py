"""
Tests for API Pydantic schemas.

Validates that:
- Request models reject malformed input before it reaches the engine
- Play responses carry a discriminated outcome
- Error codes are properly structured
- The OpenAPI schema exposes every endpoint
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_session_response_schema(self):
        """SessionResponse carries the commitment only."""
        from ..api.schemas import SessionResponse, GameTypeName

        response = SessionResponse(
            session_id="session-123",
            server_seed_hash="ab" * 32,
            game_type=GameTypeName.SLOTS,
            created_at=1_700_000_000.0,
        )

        data = response.model_dump(mode="json")
        assert data["game_type"] == "slots"
        assert data["api_version"] == "v1"
        assert "server_seed" not in data

    def test_create_session_rejects_unknown_game(self):
        from ..api.schemas import CreateSessionRequest

        with pytest.raises(ValidationError):
            CreateSessionRequest(game_type="roulette")

    @pytest.mark.parametrize("client_seed", ["short", "x" * 65])
    def test_play_request_client_seed_length(self, client_seed):
        from ..api.schemas import PlayRequest

        with pytest.raises(ValidationError):
            PlayRequest(client_seed=client_seed)

    def test_play_request_negative_bet(self):
        from ..api.schemas import PlayRequest

        with pytest.raises(ValidationError):
            PlayRequest(client_seed="a" * 16, bet_amount=-1)

    def test_play_response_outcome_discriminator(self):
        """The outcome kind selects the outcome model."""
        from ..api.schemas import PlayResponse, SlotOutcomeModel, DeckOutcomeModel

        slots = PlayResponse.model_validate({
            "session_id": "s",
            "nonce": 1,
            "server_seed": "00" * 32,
            "outcome": {"kind": "slots", "reels": [1, 1, 1], "multiplier": 12, "is_win": True, "hmac": "ff"},
        })
        assert isinstance(slots.outcome, SlotOutcomeModel)

        deck = PlayResponse.model_validate({
            "session_id": "s",
            "nonce": 1,
            "server_seed": "00" * 32,
            "outcome": {"kind": "deck", "deck": [5, 3], "deck_hash": "aa", "revealed": 2},
        })
        assert isinstance(deck.outcome, DeckOutcomeModel)

    def test_slot_outcome_needs_three_reels(self):
        from ..api.schemas import SlotOutcomeModel

        with pytest.raises(ValidationError):
            SlotOutcomeModel(reels=[1, 2], multiplier=0, is_win=False, hmac="ff")

    def test_verify_outcome_default_range(self):
        from ..api.schemas import VerifyOutcomeRequest

        request = VerifyOutcomeRequest(
            server_seed="s",
            server_seed_hash="h",
            client_seed="c",
            nonce=1,
            claimed_outcome=50,
        )
        assert request.range == 100

    def test_error_response_schema(self):
        """ErrorResponse has structured error info."""
        from ..api.schemas import ErrorResponse, ErrorCode

        response = ErrorResponse(
            error="Session expired: abc",
            error_code=ErrorCode.SESSION_EXPIRED,
            details={"session_id": "abc"},
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "SESSION_EXPIRED"
        assert data["details"]["session_id"] == "abc"


class TestErrorCodes:
    """Tests for error code coverage."""

    def test_all_error_codes_defined(self):
        """Every engine error raised on the play path has a code."""
        from ..api.schemas import ErrorCode
        from ..engine_core import (
            EntropyFailure,
            SessionExpired,
            SessionLimitReached,
            SessionNotFound,
            ValidationError as EngineValidationError,
        )

        for error in (
            EngineValidationError,
            SessionNotFound,
            SessionExpired,
            SessionLimitReached,
            EntropyFailure,
        ):
            assert ErrorCode[error.code].value == error.code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from ..api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_verification_failure_codes_match_engine(self):
        from ..api.schemas import VerificationFailureCode
        from ..verifier import VerificationFailure

        assert {c.value for c in VerificationFailureCode} == {f.value for f in VerificationFailure}


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def schema(self):
        from ..api.app import create_app
        from ..api.service import APIService
        from ..session import SessionManager
        from fastapi.openapi.utils import get_openapi

        app = create_app(service=APIService(session_manager=SessionManager()))
        return get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

    def test_openapi_schema_generates(self, schema):
        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, schema):
        schemas = schema["components"]["schemas"]

        required_schemas = [
            "SessionResponse",
            "SessionInfoResponse",
            "PlayResponse",
            "VerificationResponse",
            "ErrorResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_have_response_models(self, schema):
        paths = schema["paths"]

        expected = [
            ("/api/v1/sessions", "post"),
            ("/api/v1/sessions", "get"),
            ("/api/v1/sessions/{session_id}", "get"),
            ("/api/v1/sessions/{session_id}", "delete"),
            ("/api/v1/sessions/{session_id}/plays", "post"),
            ("/api/v1/verify/outcome", "post"),
            ("/api/v1/verify/slots", "post"),
            ("/api/v1/verify/deck", "post"),
            ("/api/v1/verify/deck-hash", "post"),
            ("/api/v1/seeds/client", "get"),
            ("/health", "get"),
        ]
        for path, method in expected:
            assert path in paths, f"Missing path: {path}"
            assert "200" in paths[path][method]["responses"]

    def test_play_documents_expiry_statuses(self, schema):
        responses = schema["paths"]["/api/v1/sessions/{session_id}/plays"]["post"]["responses"]
        assert "409" in responses
        assert "410" in responses

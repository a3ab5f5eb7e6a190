"""
FastAPI Application - REST API over the provably fair engine.

Endpoints:
    POST   /api/v1/sessions                 Start a session (returns seed hash)
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Public session info
    DELETE /api/v1/sessions/{id}            End a session
    POST   /api/v1/sessions/{id}/plays      Play one round (reveals the seed)
    POST   /api/v1/verify/outcome           Verify a numeric outcome
    POST   /api/v1/verify/slots             Verify a slot spin
    POST   /api/v1/verify/deck              Verify a full shuffled deck
    POST   /api/v1/verify/deck-hash         Verify a partly revealed deck
    GET    /api/v1/seeds/client             Fresh client seed

Engine errors and malformed request bodies are mapped to ErrorResponse bodies:
    VALIDATION_ERROR → 400, SESSION_NOT_FOUND → 404, SESSION_EXPIRED → 410,
    SESSION_LIMIT_REACHED → 409, ENTROPY_FAILURE → 500

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional
import logging
import os

from ..engine_core.errors import FairEngineError

# Environment configuration
FAIRENGINE_ENV = os.getenv("FAIRENGINE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "SESSION_NOT_FOUND": 404,
    "SESSION_EXPIRED": 410,
    "SESSION_LIMIT_REACHED": 409,
    "ENTROPY_FAILURE": 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Request
    from fastapi.encoders import jsonable_encoder
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        PlayRequest,
        VerifyOutcomeRequest,
        VerifySlotsRequest,
        VerifyDeckRequest,
        VerifyDeckHashRequest,
        # Response models
        SessionResponse,
        SessionInfoResponse,
        PlayResponse,
        VerificationResponse,
        ClientSeedResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Fair Engine API",
        description="""
Provably fair outcome engine.

## Fairness Flow

1. `POST /sessions` returns `server_seed_hash`, a SHA-256 commitment to a
   secret server seed drawn before you play.
2. Each `POST /sessions/{id}/plays` takes your `client_seed`, derives the
   outcome from HMAC-SHA256(server_seed, "client_seed:nonce:block"), and
   returns it together with the `server_seed`.
3. Anyone can check the round with the `/verify` endpoints.

## Error Codes

| Code | Description |
|------|-------------|
| `VALIDATION_ERROR` | Malformed request input |
| `SESSION_NOT_FOUND` | Session does not exist |
| `SESSION_EXPIRED` | Session past its max age; start a new one |
| `SESSION_LIMIT_REACHED` | Session used all of its plays; start a new one |
| `ENTROPY_FAILURE` | Server randomness unavailable |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details or None,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(FairEngineError)
    async def engine_error_handler(request: Request, exc: FairEngineError) -> JSONResponse:
        status_code = ERROR_STATUS.get(exc.code, 500)
        if status_code >= 500:
            logger.error("Engine failure on %s: %s", request.url.path, exc.message)
        try:
            error_code = ErrorCode(exc.code)
        except ValueError:
            error_code = ErrorCode.INTERNAL_ERROR
        return make_error_response(error_code, exc.message, status_code, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed bodies share the engine's VALIDATION_ERROR shape
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            400,
            {"errors": jsonable_encoder(exc.errors())},
        )

    error_responses = {
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: error_responses[400]},
        tags=["Sessions"],
        summary="Start a game session",
    )
    async def create_session(request: CreateSessionRequest) -> SessionResponse:
        """
        Start a session and publish the server seed commitment.

        The raw server seed is never part of this response.
        """
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionInfoResponse,
        responses={404: error_responses[404]},
        tags=["Sessions"],
        summary="Get session info",
    )
    async def get_session(session_id: str) -> SessionInfoResponse:
        """Public session info. Works for expired sessions too."""
        return api_service.get_session(session_id)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/plays",
        response_model=PlayResponse,
        responses={
            **error_responses,
            409: {"model": ErrorResponse, "description": "Play limit reached"},
            410: {"model": ErrorResponse, "description": "Session expired"},
        },
        tags=["Game Loop"],
        summary="Play one round",
    )
    async def play(session_id: str, request: PlayRequest) -> PlayResponse:
        """
        Play one round and reveal the server seed.

        Blackjack outcomes include only the first cards of the deck plus
        the SHA-256 hash of the whole deck.
        """
        return api_service.play(session_id, request)

    # =========================================================================
    # Verification Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/verify/outcome",
        response_model=VerificationResponse,
        tags=["Verification"],
        summary="Verify a numeric outcome",
    )
    async def verify_outcome(request: VerifyOutcomeRequest) -> VerificationResponse:
        return api_service.verify_outcome(request)

    @app.post(
        "/api/v1/verify/slots",
        response_model=VerificationResponse,
        tags=["Verification"],
        summary="Verify a slot spin",
    )
    async def verify_slots(request: VerifySlotsRequest) -> VerificationResponse:
        return api_service.verify_slots(request)

    @app.post(
        "/api/v1/verify/deck",
        response_model=VerificationResponse,
        tags=["Verification"],
        summary="Verify a shuffled deck",
    )
    async def verify_deck(request: VerifyDeckRequest) -> VerificationResponse:
        return api_service.verify_deck(request)

    @app.post(
        "/api/v1/verify/deck-hash",
        response_model=VerificationResponse,
        tags=["Verification"],
        summary="Verify a partly revealed deck against its hash",
    )
    async def verify_deck_hash(request: VerifyDeckHashRequest) -> VerificationResponse:
        return api_service.verify_deck_hash(request)

    @app.get(
        "/api/v1/seeds/client",
        response_model=ClientSeedResponse,
        tags=["Verification"],
        summary="Generate a client seed",
    )
    async def client_seed() -> ClientSeedResponse:
        """Convenience default for players with no entropy of their own."""
        return ClientSeedResponse(client_seed=api_service.new_client_seed())

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="fairengine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Fair Engine API",
            "version": API_VERSION,
            "env": FAIRENGINE_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app

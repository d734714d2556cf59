"""
FastAPI Application - REST API for the patience engine.

Endpoints:
    GET    /health                           Health check
    POST   /api/v1/sessions                  Deal a new game
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get render snapshot
    DELETE /api/v1/sessions/{id}             End session
    POST   /api/v1/sessions/{id}/commands    Submit a command token
    GET    /api/v1/sessions/{id}/moves       List legal command tokens

Handlers are async and never await while touching a session, so each
session is driven by one command at a time on the event loop thread.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import os

from .. import __version__ as API_VERSION

# Environment configuration
PATIENCE_ENV = os.getenv("PATIENCE_ENV", "development")
PATIENCE_SEED = os.getenv("PATIENCE_SEED", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
SESSION_MAX_AGE = int(os.getenv("PATIENCE_SESSION_MAX_AGE", "3600"))


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        CommandRequest,
        # Response models
        CommandResponse,
        EndSessionResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        LegalMovesResponse,
        SessionListResponse,
        # Enums
        ErrorCode,
    )
    from ..session import SessionManager

    app = FastAPI(
        title="Patience Engine API",
        description="""
Klondike-style patience engine.

## Commands

| Token | Meaning |
|-------|---------|
| `D` | Draw a card (recycles the reserve when the draw pile is empty) |
| `SDN` | Move N cards from lane S to lane D |
| `SD` | Move one card from lane S to lane D |
| `SX` | Move the top card of lane S to suit pile X (H, D, C, S) |
| `PX` | Move the last drawn card to lane or suit pile X |
| `Q` | Quit (ends the session) |

Every command returns a status `message`, accepted or not.
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

    # Service instance
    default_seed = int(PATIENCE_SEED) if PATIENCE_SEED else None
    api_service = service or APIService(session_manager=SessionManager(default_seed=default_seed))
    app.state.api_service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_to_response(response: ErrorResponse) -> JSONResponse:
        status_code = 404 if response.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return make_error_response(
            response.error_code,
            response.error,
            status_code=status_code,
            details=response.details,
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Deal a new game",
    )
    async def create_session(request: CreateSessionRequest | None = None) -> GameStateResponse:
        """Create a session with a freshly dealt game."""
        api_service.cleanup_stale_sessions(SESSION_MAX_AGE)
        return api_service.create_session(request or CreateSessionRequest())

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
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get the render snapshot",
    )
    async def get_session(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/commands",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Submit a command",
    )
    async def submit_command(
        session_id: str,
        request: CommandRequest,
    ) -> Union[CommandResponse, JSONResponse]:
        """
        Submit one command token.

        Rejected moves are not HTTP errors: they return `success=false`
        with an `outcome` and a `message`.
        """
        response = api_service.submit_command(session_id, request)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/moves",
        response_model=LegalMovesResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="List legal commands",
    )
    async def get_moves(session_id: str) -> Union[LegalMovesResponse, JSONResponse]:
        response = api_service.get_legal_moves(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

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
        return HealthResponse(
            status="healthy",
            service="patience-engine",
            version=API_VERSION,
            environment=PATIENCE_ENV,
        )

    return app

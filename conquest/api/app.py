"""
FastAPI Application - REST API for a client UI.

Endpoints:
    GET    /api/v1/rules                    Rules text for the rules dialog
    GET    /api/v1/tally                    Persistent win counters
    POST   /api/v1/sessions                 Create game session
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get board and turn
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/moves      Play the current player's move
    POST   /api/v1/sessions/{id}/reset      Clear the board

Both players share one client (hot-seat). The server never decides whose
click it was: every move is played for the player whose turn it is.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

# Environment configuration
CONQUEST_ENV = os.getenv("CONQUEST_ENV", "development")
CONQUEST_DATA_DIR = os.getenv("CONQUEST_DATA_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# HTTP status for a rejected move
MOVE_REJECTION_STATUS = 409


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        MoveRequest,
        SessionResponse,
        GameStateResponse,
        MoveResponse,
        SessionListResponse,
        EndSessionResponse,
        RulesResponse,
        TallyInfo,
        HealthResponse,
        ErrorResponse,
        ErrorCode,
    )
    from ..session import WinTally
    from .. import __version__

    app = FastAPI(
        title="Conquest Game API",
        description="""
Two-player territorial board game on a 5x5 grid.

## Playing

1. `POST /api/v1/sessions` to open a board
2. `POST /api/v1/sessions/{id}/moves` with `{"row": r, "col": c}` for each click
3. Redraw the `changed_tiles` of each accepted move
4. `POST /api/v1/sessions/{id}/reset` to play again

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `GAME_OVER` | The game already finished |
| `NOT_YOUR_TILE` | The tile is not the current player's |
| `OUT_OF_BOUNDS` | Position is off the board (direct service calls) |
| `VALIDATION_ERROR` | Request body failed validation, e.g. row or col outside 0-4 (HTTP 422) |
        """,
        version=__version__,
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

    api_service = service or APIService(tally=WinTally(data_dir=CONQUEST_DATA_DIR))

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
                details=details,
            ).model_dump(mode="json"),
        )

    def error_to_json(error: ErrorResponse) -> JSONResponse:
        if error.error_code == ErrorCode.SESSION_NOT_FOUND:
            status_code = 404
        else:
            status_code = MOVE_REJECTION_STATUS
        return make_error_response(error.error_code, error.error, status_code, error.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": errors},
        )

    # =========================================================================
    # Rules / Tally
    # =========================================================================

    @app.get(
        "/api/v1/rules",
        response_model=RulesResponse,
        tags=["Game"],
        summary="Get the rules text",
    )
    async def get_rules() -> RulesResponse:
        return api_service.get_rules()

    @app.get(
        "/api/v1/tally",
        response_model=TallyInfo,
        tags=["Game"],
        summary="Get win counters",
    )
    async def get_tally() -> TallyInfo:
        """Wins per player across all sessions. Draws are not counted."""
        return api_service.get_tally()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session() -> SessionResponse:
        """Open a fresh board with Player 1 to move."""
        return api_service.create_session()

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
        summary="Get board and turn",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
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
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/moves",
        response_model=MoveResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Move rejected, state unchanged"},
        },
        tags=["Game"],
        summary="Play the current player's move",
    )
    async def play_move(session_id: str, move: MoveRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Apply a move for whoever's turn it is.

        The handler runs to completion without awaiting, so moves on one
        session never interleave.
        """
        response = api_service.play_move(session_id, move)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Clear the board",
    )
    async def reset_game(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.reset_game(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
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
            service="conquest-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Conquest Game API",
            "version": __version__,
            "env": CONQUEST_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app

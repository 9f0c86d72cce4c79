"""
API Module - Client interface.

Exposes the engine via REST API for a client UI (web page, mobile app).
The client:
1. Opens a session
2. Sends each tile click as a move
3. Redraws the changed tiles and the turn indicator
4. Shows the outcome and the win tally when a game ends

Game state is session-scoped. Only the win tally is persisted.
"""

from .schemas import (
    # Requests
    MoveRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    MoveResponse,
    SessionListResponse,
    EndSessionResponse,
    RulesResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    TileInfo,
    TallyInfo,
    SessionStatus,
    OutcomeValue,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "MoveRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "MoveResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "RulesResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "TileInfo",
    "TallyInfo",
    "SessionStatus",
    "OutcomeValue",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]

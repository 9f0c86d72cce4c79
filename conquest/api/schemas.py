"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client UI and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- GAME_OVER: Move sent after the game finished
- NOT_YOUR_TILE: Move targets a tile the current player may not use
- OUT_OF_BOUNDS: Move targets a position off the board (service calls only;
  HTTP requests are bounded by MoveRequest and fail with VALIDATION_ERROR)
- VALIDATION_ERROR: Request body or parameters failed validation
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core import BOARD_SIZE


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


class OutcomeValue(str, Enum):
    """How a game ended."""
    PLAYER_1_WINS = "player1_wins"
    PLAYER_2_WINS = "player2_wins"
    DRAW = "draw"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    NOT_YOUR_TILE = "NOT_YOUR_TILE"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    """One tile, ready to draw."""
    row: int
    col: int
    owner: Optional[int] = Field(default=None, description="1, 2 or null when empty")
    points: int = 0
    color: str = Field(description="Background colour for the tile")
    label: str = Field(description="Text on the tile, empty when it has no points")

    model_config = {"from_attributes": True}


class TallyInfo(BaseModel):
    """Persistent win counters."""
    player1_wins: int = 0
    player2_wins: int = 0


# =============================================================================
# Requests
# =============================================================================

class MoveRequest(BaseModel):
    """The tile the current player picked."""
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Full board and turn information for a session."""
    session_id: str
    status: SessionStatus
    current_player: int
    turn_indicator: str
    board: list[list[TileInfo]]
    tile_counts: dict[str, int] = Field(default_factory=dict)
    game_over: bool = False
    outcome: Optional[OutcomeValue] = None
    message: str = ""
    move_count: int = 0
    games_played: int = 0


class SessionResponse(BaseModel):
    """Session summary returned on creation."""
    session_id: str
    status: SessionStatus
    created_at: float
    state: GameStateResponse
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Result of an accepted move."""
    session_id: str
    player: int
    changed_tiles: list[TileInfo] = Field(default_factory=list)
    expansions: int = 0
    game_over: bool = False
    outcome: Optional[OutcomeValue] = None
    message: str = ""
    next_player: Optional[int] = None
    turn_indicator: str = ""
    state_changes: list[str] = Field(default_factory=list)
    tally: Optional[TallyInfo] = None


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response when a session ends."""
    success: bool
    session_id: str


class RulesResponse(BaseModel):
    title: str
    text: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Error returned instead of a normal response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None
    api_version: str = "v1"

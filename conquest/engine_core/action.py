"""
Move System - Move requests, tile snapshots and move results.

A move is the only thing a player can do: pick a tile.
The result tells the presentation layer:
1. Whether the move was accepted (and why not, if rejected)
2. Which tiles changed, in the order they were touched
3. Whether the game ended, and how
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .state import Player, Outcome, Tile


class RejectionCode(str, Enum):
    """Why a move was ignored."""
    GAME_OVER = "GAME_OVER"
    NOT_YOUR_TILE = "NOT_YOUR_TILE"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"


@dataclass(frozen=True)
class Move:
    """A placement request for the player whose turn it is."""
    row: int
    col: int


@dataclass(frozen=True)
class TileView:
    """
    Read-only snapshot of one tile.

    This is what the render callback receives.
    """
    row: int
    col: int
    owner: Player | None
    points: int

    @classmethod
    def of(cls, row: int, col: int, tile: Tile) -> TileView:
        return cls(row=row, col=col, owner=tile.owner, points=tile.points)


@dataclass
class MoveResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move was accepted
    - Rejection reason (if ignored)
    - Changed tiles and cascade size (for UI updates)
    - Game over flag and outcome
    """
    success: bool
    error: str | None = None
    error_code: RejectionCode | None = None

    player: Player | None = None
    changed_tiles: list[TileView] = field(default_factory=list)
    expansions: int = 0

    game_over: bool = False
    outcome: Outcome | None = None
    next_player: Player | None = None

    # Human-readable changes, in order
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, error: str, error_code: RejectionCode, game_over: bool = False,
                 outcome: Outcome | None = None) -> MoveResult:
        """Create a rejection result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            game_over=game_over,
            outcome=outcome,
        )

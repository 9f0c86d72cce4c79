"""
Engine Core - Deterministic game state management and expansion.

The engine is the runtime that:
1. Owns the GameState (board, turn, first-move flags, outcome)
2. Validates moves
3. Applies moves and runs the expansion cascade
4. Detects wins and draws
"""

from .state import (
    GameState,
    Board,
    Tile,
    Player,
    Outcome,
    OutOfBounds,
    BOARD_SIZE,
    EXPANSION_THRESHOLD,
    CONQUEST_POINTS,
)
from .action import Move, MoveResult, RejectionCode, TileView
from .expansion import ExpansionLog, run_expansion_pass, DIRECTIONS
from .outcome import check_outcome
from .engine import GameEngine, apply_move, is_legal

__all__ = [
    "GameState",
    "Board",
    "Tile",
    "Player",
    "Outcome",
    "OutOfBounds",
    "BOARD_SIZE",
    "EXPANSION_THRESHOLD",
    "CONQUEST_POINTS",
    "Move",
    "MoveResult",
    "RejectionCode",
    "TileView",
    "ExpansionLog",
    "run_expansion_pass",
    "DIRECTIONS",
    "check_outcome",
    "GameEngine",
    "apply_move",
    "is_legal",
]

"""
Game Engine - Applies moves to the game state.

The engine is the single point of state mutation.
All board changes must go through apply_move().

Design principles:
- Synchronous: a move runs to completion, cascade included
- Validates before applying
- Rejections come back as a MoveResult, never as an exception
- State is untouched by a rejected move
"""

from __future__ import annotations
import logging

from .state import GameState, Player, Outcome, Board, OutOfBounds, CONQUEST_POINTS, in_bounds
from .action import Move, MoveResult, RejectionCode, TileView
from .expansion import ExpansionLog, run_expansion_pass
from .outcome import check_outcome

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Owns one GameState and exposes the operations a UI needs.

    Usage:
        engine = GameEngine()
        result = engine.apply_move(0, 0)
        if result.success:
            for view in result.changed_tiles:
                redraw(view)
    """

    def __init__(self, state: GameState | None = None):
        self._state = state if state is not None else GameState.fresh()

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> Player:
        return self._state.current_player

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def outcome(self) -> Outcome | None:
        return self._state.outcome

    def apply_move(self, row: int, col: int) -> MoveResult:
        """Place for the current player at (row, col)."""
        return apply_move(self._state, row, col)

    def play(self, move: Move) -> MoveResult:
        return self.apply_move(move.row, move.col)

    def reset(self) -> bool:
        """Start over: empty board, Player 1 to move."""
        self._state = GameState.fresh()
        logger.debug("Game reset")
        return True

    def get_tile(self, row: int, col: int) -> TileView:
        """
        Snapshot of the tile at (row, col).

        Raises OutOfBounds for positions off the board.
        """
        return TileView.of(row, col, self._state.board.tile(row, col))

    def board_view(self) -> list[list[TileView]]:
        """Snapshot of the whole grid, row by row."""
        board = self._state.board
        return [
            [TileView.of(row, col, tile) for col, tile in enumerate(tiles)]
            for row, tiles in enumerate(board.tiles)
        ]

    def tile_counts(self) -> dict[Player, int]:
        board = self._state.board
        return {player: board.count_owned(player) for player in Player}


def is_legal(state: GameState, row: int, col: int) -> bool:
    """Check whether the current player may place at (row, col)."""
    return _validate_move(state, row, col) is None


def apply_move(state: GameState, row: int, col: int) -> MoveResult:
    """
    Apply a placement for state.current_player, mutating state in place.

    Steps for a legal move:
    1. Clear the player's first-move flag
    2. Claim the tile (3 points on an empty tile, otherwise +1)
    3. Run the expansion pass
    4. Check for a win or draw
    5. Hand the turn to the opponent unless the game ended
    """
    rejection = _validate_move(state, row, col)
    if rejection:
        error_code, error = rejection
        logger.debug("Rejected move (%d, %d): %s", row, col, error)
        return MoveResult.rejected(
            error,
            error_code,
            game_over=state.game_over,
            outcome=state.outcome,
        )

    player = state.current_player
    board = state.board
    tile = board.tile(row, col)
    changes = []

    if state.first_move[player]:
        state.first_move[player] = False

    previous_points = tile.points
    tile.claim(player, CONQUEST_POINTS if previous_points == 0 else previous_points + 1)
    state.move_count += 1
    changes.append(f"{player.label} placed on ({row}, {col}), now {tile.points} points")
    logger.debug("%s placed on (%d, %d): %d -> %d", player.label, row, col, previous_points, tile.points)

    log = ExpansionLog()
    log.touch(row, col)
    run_expansion_pass(board, log)
    for e_row, e_col in log.expansions:
        changes.append(f"Tile ({e_row}, {e_col}) expanded")

    outcome = check_outcome(board)
    if outcome is not None:
        state.game_over = True
        state.outcome = outcome
        changes.append(_describe_outcome(outcome))
        logger.info("Game over after %d moves: %s", state.move_count, outcome.value)
    else:
        state.current_player = player.opponent()

    return MoveResult(
        success=True,
        player=player,
        changed_tiles=_views(board, log),
        expansions=len(log.expansions),
        game_over=state.game_over,
        outcome=state.outcome,
        next_player=None if state.game_over else state.current_player,
        state_changes=changes,
    )


def _validate_move(state: GameState, row: int, col: int) -> tuple[RejectionCode, str] | None:
    """
    Validate a placement for the current player.

    Returns (code, message) if the move must be ignored, None if legal.
    """
    if state.game_over:
        return RejectionCode.GAME_OVER, "Game is already over"

    if not in_bounds(row, col):
        return RejectionCode.OUT_OF_BOUNDS, str(OutOfBounds(row, col))

    player = state.current_player
    owner = state.board.tile(row, col).owner
    if state.first_move[player] or owner == player:
        return None

    # An empty tile is only claimable with the first move
    if owner is None:
        return RejectionCode.NOT_YOUR_TILE, f"Tile ({row}, {col}) is not owned by {player.label}"
    return RejectionCode.NOT_YOUR_TILE, f"Tile ({row}, {col}) belongs to {owner.label}"


def _views(board: Board, log: ExpansionLog) -> list[TileView]:
    return [TileView.of(row, col, board.tile(row, col)) for row, col in log.touched]


def _describe_outcome(outcome: Outcome) -> str:
    if outcome.winner is not None:
        return f"{outcome.winner.label} wins!"
    return "It's a draw!"

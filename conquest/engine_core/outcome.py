"""
Outcome checking for a settled board.
"""

from __future__ import annotations

from .state import Board, Player, Outcome


# A player must hold more than this many tiles to win by elimination.
# With one tile each after the opening moves, nobody wins on move one.
MIN_TILES_TO_WIN = 1


def check_outcome(board: Board) -> Outcome | None:
    """
    Decide whether the game is over.

    A player wins when the opponent holds no tiles and they hold more than
    one. A full board with no winner is a draw. Otherwise returns None.
    """
    player_1_tiles = board.count_owned(Player.PLAYER_1)
    player_2_tiles = board.count_owned(Player.PLAYER_2)

    if player_1_tiles == 0 and player_2_tiles > MIN_TILES_TO_WIN:
        return Outcome.PLAYER_2_WINS
    if player_2_tiles == 0 and player_1_tiles > MIN_TILES_TO_WIN:
        return Outcome.PLAYER_1_WINS
    if board.is_full():
        return Outcome.DRAW
    return None

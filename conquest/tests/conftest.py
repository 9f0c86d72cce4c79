"""
Pytest fixtures for Conquest tests.
"""

import pytest

from ..engine_core.state import GameState, Board, Tile, Player
from ..engine_core.engine import GameEngine
from ..session import WinTally


MARKS = {"A": Player.PLAYER_1, "B": Player.PLAYER_2}


def parse_board(rows: list[str]) -> Board:
    """
    Build a board from 5 strings of 5 tokens.

    "." is an empty tile, "A3" is Player 1 with 3 points, "B1" is Player 2 with 1.
    """
    tiles = []
    for line in rows:
        row = []
        for token in line.split():
            if token == ".":
                row.append(Tile())
            else:
                row.append(Tile(owner=MARKS[token[0]], points=int(token[1:])))
        assert len(row) == 5
        tiles.append(row)
    assert len(tiles) == 5
    return Board(tiles=tiles)


@pytest.fixture
def make_state():
    """Factory for mid-game states (both first moves already played by default)."""
    def _make(rows, current=Player.PLAYER_1, first_move=None):
        return GameState(
            board=parse_board(rows),
            current_player=current,
            first_move=first_move or {Player.PLAYER_1: False, Player.PLAYER_2: False},
        )
    return _make


@pytest.fixture
def engine() -> GameEngine:
    """A fresh engine, Player 1 to move."""
    return GameEngine()


@pytest.fixture
def opened_engine() -> GameEngine:
    """Engine after Player 1 took (0, 0) and Player 2 took (4, 4)."""
    engine = GameEngine()
    engine.apply_move(0, 0)
    engine.apply_move(4, 4)
    return engine


@pytest.fixture
def tally(tmp_path) -> WinTally:
    """Win tally stored in a temporary directory."""
    return WinTally(data_dir=tmp_path)

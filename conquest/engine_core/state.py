"""
Game State - Tiles, board and the mutable state of one game.

Design principles:
- One explicit GameState value owns everything (no module-level globals)
- Board owns its 25 tiles by value, nothing is shared between boards
- Mutation happens in place, but only through the engine
- copy() gives an independent snapshot for tests and previews
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


BOARD_SIZE = 5
EXPANSION_THRESHOLD = 4
CONQUEST_POINTS = 3


class OutOfBounds(IndexError):
    """Raised when a (row, col) lies outside the board."""

    def __init__(self, row: int, col: int):
        super().__init__(
            f"Position ({row}, {col}) is off the board. "
            f"Rows and columns must be in [0, {BOARD_SIZE})."
        )
        self.row = row
        self.col = col


class Player(Enum):
    """The two players."""
    PLAYER_1 = 1
    PLAYER_2 = 2

    def opponent(self) -> Player:
        return Player.PLAYER_2 if self == Player.PLAYER_1 else Player.PLAYER_1

    @property
    def label(self) -> str:
        return f"Player {self.value}"


class Outcome(Enum):
    """How a finished game ended."""
    PLAYER_1_WINS = "player1_wins"
    PLAYER_2_WINS = "player2_wins"
    DRAW = "draw"

    @property
    def winner(self) -> Player | None:
        if self == Outcome.PLAYER_1_WINS:
            return Player.PLAYER_1
        if self == Outcome.PLAYER_2_WINS:
            return Player.PLAYER_2
        return None

    @classmethod
    def win_for(cls, player: Player) -> Outcome:
        return cls.PLAYER_1_WINS if player == Player.PLAYER_1 else cls.PLAYER_2_WINS


@dataclass
class Tile:
    """
    One cell of the grid.

    An unowned tile always has zero points.
    """
    owner: Player | None = None
    points: int = 0

    @property
    def is_empty(self) -> bool:
        return self.owner is None

    def increment(self):
        self.points += 1

    def claim(self, player: Player, points: int):
        self.owner = player
        self.points = points

    def reset(self):
        self.owner = None
        self.points = 0


def in_bounds(row: int, col: int) -> bool:
    """Check that a position lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass
class Board:
    """
    Fixed 5x5 grid of tiles, indexed by (row, col).
    """
    tiles: list[list[Tile]] = field(
        default_factory=lambda: [
            [Tile() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
    )

    def tile(self, row: int, col: int) -> Tile:
        """Get the tile at (row, col), raising OutOfBounds off the grid."""
        if not in_bounds(row, col):
            raise OutOfBounds(row, col)
        return self.tiles[row][col]

    def positions(self):
        """Yield every (row, col) in row-major order."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield row, col

    def count_owned(self, player: Player) -> int:
        return sum(1 for row in self.tiles for t in row if t.owner == player)

    def is_full(self) -> bool:
        """True when no unowned tile remains."""
        return all(not t.is_empty for row in self.tiles for t in row)

    def clear(self):
        for row in self.tiles:
            for t in row:
                t.reset()

    def copy(self) -> Board:
        return Board(tiles=[
            [Tile(owner=t.owner, points=t.points) for t in row]
            for row in self.tiles
        ])


@dataclass
class GameState:
    """
    Complete state of one game.

    This is the canonical state the engine operates on.
    Once game_over is set only a reset changes it again.
    """
    board: Board = field(default_factory=Board)
    current_player: Player = Player.PLAYER_1

    # True until that player's first placement
    first_move: dict[Player, bool] = field(
        default_factory=lambda: {Player.PLAYER_1: True, Player.PLAYER_2: True}
    )

    game_over: bool = False
    outcome: Outcome | None = None

    # Successful placements since the last reset
    move_count: int = 0

    @classmethod
    def fresh(cls) -> GameState:
        """Create the initial state: empty board, Player 1 to move."""
        return cls()

    def is_first_move(self, player: Player) -> bool:
        return self.first_move[player]

    def copy(self) -> GameState:
        """Create an independent copy of the state."""
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            first_move=dict(self.first_move),
            game_over=self.game_over,
            outcome=self.outcome,
            move_count=self.move_count,
        )

"""
Expansion - Spreads overloaded tiles into their neighbours.

When a tile holds EXPANSION_THRESHOLD points or more it empties itself and
pushes one point into each orthogonal neighbour:
- A neighbour owned by someone else (or nobody) is captured with 1 point
- A neighbour already owned by the expanding player gains 1 point
- A neighbour pushed over the threshold expands immediately (depth-first)

The board is scanned in row-major order and the scan reads live state,
so tiles changed by an earlier cascade can trigger later in the same pass.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import Board, Player, EXPANSION_THRESHOLD, in_bounds

logger = logging.getLogger(__name__)


# Neighbour visiting order: left, right, up, down
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass
class ExpansionLog:
    """
    What one expansion pass did.

    touched keeps every position in the order it was first changed.
    """
    expansions: list[tuple[int, int]] = field(default_factory=list)
    captures: list[tuple[int, int]] = field(default_factory=list)
    touched: list[tuple[int, int]] = field(default_factory=list)

    def touch(self, row: int, col: int):
        if (row, col) not in self.touched:
            self.touched.append((row, col))


@dataclass
class _Frame:
    """One pending expansion: where it started and the next direction to visit."""
    row: int
    col: int
    owner: Player
    next_direction: int = 0


def run_expansion_pass(board: Board, log: ExpansionLog | None = None) -> ExpansionLog:
    """
    Scan the board once and expand every tile at or over the threshold.

    Mutates the board in place and returns the log of what happened.
    """
    if log is None:
        log = ExpansionLog()

    for row, col in board.positions():
        if board.tile(row, col).points >= EXPANSION_THRESHOLD:
            expand_tile(board, row, col, log)

    return log


def expand_tile(board: Board, row: int, col: int, log: ExpansionLog):
    """
    Expand the tile at (row, col) and everything it pushes over the threshold.

    Uses an explicit stack of frames instead of recursion. Each frame resumes at
    the next neighbour, so the order of changes is the same as a recursive
    depth-first walk.
    """
    stack = [_open_frame(board, row, col, log)]

    while stack:
        frame = stack[-1]
        if frame.next_direction == len(DIRECTIONS):
            stack.pop()
            continue

        d_row, d_col = DIRECTIONS[frame.next_direction]
        frame.next_direction += 1

        n_row, n_col = frame.row + d_row, frame.col + d_col
        if not in_bounds(n_row, n_col):
            continue

        neighbour = board.tile(n_row, n_col)
        if neighbour.owner != frame.owner:
            neighbour.claim(frame.owner, 1)
            log.captures.append((n_row, n_col))
        else:
            neighbour.increment()
        log.touch(n_row, n_col)

        if neighbour.points >= EXPANSION_THRESHOLD:
            stack.append(_open_frame(board, n_row, n_col, log))


def _open_frame(board: Board, row: int, col: int, log: ExpansionLog) -> _Frame:
    """Empty the expanding tile and start visiting its neighbours."""
    tile = board.tile(row, col)
    owner = tile.owner
    logger.debug("Tile (%d, %d) expands for %s with %d points", row, col, owner, tile.points)

    tile.reset()
    log.expansions.append((row, col))
    log.touch(row, col)
    return _Frame(row=row, col=col, owner=owner)

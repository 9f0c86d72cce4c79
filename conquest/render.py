"""
Render helpers - What a UI shows for the engine's state.

The engine only hands out TileViews and outcomes. These helpers turn them
into the colours, labels and messages the game screen displays.
"""

from __future__ import annotations

from .engine_core import Player, Outcome, TileView


PLAYER_COLORS = {
    Player.PLAYER_1: "#E53935",
    Player.PLAYER_2: "#1E88E5",
}
EMPTY_COLOR = "transparent"

RULES_TITLE = "Game Rules"
RULES_TEXT = (
    "1st Turn: Players can choose any tile on the grid and get 3 points.\n"
    "Subsequent Turns: Click on your colored tile to add 1 point.\n"
    "Conquest and Expansion: When a tile reaches 4 points, it expands to adjacent tiles.\n"
    "Objective: Eliminate the opponent's color from the grid."
)


def tile_color(owner: Player | None) -> str:
    """Background colour for a tile owned by owner."""
    if owner is None:
        return EMPTY_COLOR
    return PLAYER_COLORS[owner]


def tile_label(points: int) -> str:
    """Text shown on a tile: the points, or nothing when empty."""
    return str(points) if points > 0 else ""


def render_tile(view: TileView) -> tuple[str, str]:
    """Map a tile snapshot to (colour, label)."""
    return tile_color(view.owner), tile_label(view.points)


def turn_indicator(player: Player) -> str:
    return f"{player.label}'s Turn"


def outcome_message(outcome: Outcome | None) -> str:
    """Banner text for a finished game, empty while it is running."""
    if outcome is None:
        return ""
    if outcome == Outcome.DRAW:
        return "It's a draw!"
    return f"{outcome.winner.label} wins!"


def board_text(rows: list[list[TileView]]) -> str:
    """
    Plain-text board for terminals.

    Player 1 tiles read as "A<points>", Player 2 as "B<points>", empty as ".".
    """
    marks = {Player.PLAYER_1: "A", Player.PLAYER_2: "B"}
    lines = ["     " + "  ".join(f"{c:>2}" for c in range(len(rows[0])))]
    for r, row in enumerate(rows):
        cells = []
        for view in row:
            if view.owner is None:
                cells.append(" .")
            else:
                cells.append(f"{marks[view.owner]}{view.points}")
        lines.append(f"{r:>2}   " + "  ".join(cells))
    return "\n".join(lines)

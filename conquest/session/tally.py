"""
Win Tally - Persistent win counters per player.

The tally:
- Is a tiny key-value store ("game_prefs" with player1_wins / player2_wins)
- Lives on local disk as JSON
- Is read once at startup and written after every decisive game
- Is the ONLY persistence in the system

Draws are never recorded.
"""

from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path

from ..engine_core import Player, Outcome

logger = logging.getLogger(__name__)


STORE_NAME = "game_prefs"
TALLY_KEYS = {
    Player.PLAYER_1: "player1_wins",
    Player.PLAYER_2: "player2_wins",
}


def default_data_dir() -> Path:
    """~/.conquest unless CONQUEST_DATA_DIR says otherwise."""
    configured = os.getenv("CONQUEST_DATA_DIR")
    if configured:
        return Path(configured)
    return Path.home() / ".conquest"


class WinTally:
    """
    File-backed win counters.

    Usage:
        tally = WinTally(data_dir="~/.conquest")
        tally.wins(Player.PLAYER_1)
        tally.record(Outcome.PLAYER_1_WINS)
    """

    def __init__(self, data_dir: str | Path | None = None):
        if data_dir is None:
            data_dir = default_data_dir()
        self.data_dir = Path(data_dir).expanduser()
        self._counts = self._load()

    @property
    def path(self) -> Path:
        return self.data_dir / f"{STORE_NAME}.json"

    def wins(self, player: Player) -> int:
        return self._counts[TALLY_KEYS[player]]

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def record(self, outcome: Outcome) -> bool:
        """
        Count a finished game.

        Returns True if the tally changed (a decisive win), False for a draw.
        """
        winner = outcome.winner
        if winner is None:
            return False

        key = TALLY_KEYS[winner]
        self._counts[key] += 1
        self._save()
        logger.info("%s now has %d wins", winner.label, self._counts[key])
        return True

    def clear(self):
        """Reset both counters to zero."""
        self._counts = {key: 0 for key in TALLY_KEYS.values()}
        self._save()

    def _load(self) -> dict[str, int]:
        """
        Read counters from disk.

        A missing key reads as 0. An unreadable file is logged and ignored.
        """
        counts = {key: 0 for key in TALLY_KEYS.values()}
        if not self.path.exists():
            return counts

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable tally file %s: %s", self.path, e)
            return counts

        if not isinstance(stored, dict):
            logger.warning("Ignoring malformed tally file %s", self.path)
            return counts

        for key in counts:
            value = stored.get(key, 0)
            if isinstance(value, int) and value >= 0:
                counts[key] = value
        return counts

    def _save(self):
        """Write to a temp file beside the store, then swap it in."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{STORE_NAME}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._counts, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

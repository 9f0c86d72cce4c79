"""
Session Module - Game sessions and the win tally.

A session represents one board on one screen:
- Created when a client starts playing
- Holds the engine and serializes moves
- Can be reset for another game
- Destroyed when the client ends it

Sessions are EPHEMERAL. The only persistence is the win tally.
"""

from .manager import SessionManager, Session, SessionState
from .tally import WinTally, TALLY_KEYS, default_data_dir

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "WinTally",
    "TALLY_KEYS",
    "default_data_dir",
]

"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A client opens a session -> fresh engine, Player 1 to move
2. During the game:
   - The client sends the tile the current player picked
   - The engine applies it (cascade and outcome included)
   - The client redraws the changed tiles
3. A decisive game is counted in the win tally exactly once
4. The client can reset the board (same session) or end the session

PERSISTENCE RULES:
- Sessions are in-memory only
- The win tally is the only thing written to disk
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import threading
import time
import uuid

from ..engine_core import GameEngine, MoveResult, Outcome
from .tally import WinTally

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Waiting for a reset
    ENDED = "ended"  # Closed by the client


@dataclass
class Session:
    """
    One board shared by two players on the same screen.

    Moves are serialized by a lock so two clicks can never interleave
    their board mutations.
    """
    session_id: str
    created_at: float
    engine: GameEngine = field(default_factory=GameEngine)
    state: SessionState = SessionState.ACTIVE
    games_played: int = 0
    last_move_at: float | None = None

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _recorded: bool = False

    def is_active(self) -> bool:
        return self.state != SessionState.ENDED

    def play(self, row: int, col: int, tally: WinTally | None = None) -> MoveResult:
        """
        Apply a move and record a decisive finish in the tally.
        """
        with self._lock:
            result = self.engine.apply_move(row, col)
            if not result.success:
                return result

            self.last_move_at = time.time()
            if result.game_over:
                self.state = SessionState.GAME_OVER
                self._record(result.outcome, tally)
            return result

    def reset(self) -> bool:
        """Clear the board for a new game in the same session."""
        with self._lock:
            if self.engine.game_over:
                self.games_played += 1
            self.engine.reset()
            self.state = SessionState.ACTIVE
            self._recorded = False
            return True

    def _record(self, outcome: Outcome, tally: WinTally | None):
        if self._recorded:
            return
        self._recorded = True
        if tally is not None:
            tally.record(outcome)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Route moves to the right session
    - Keep the shared win tally up to date
    - Clean up ended or stale sessions
    """

    def __init__(self, tally: WinTally | None = None):
        self._sessions: dict[str, Session] = {}
        self.tally = tally

    def create_session(self) -> Session:
        """Create a new session with a fresh board."""
        session = Session(session_id=str(uuid.uuid4()), created_at=time.time())
        self._sessions[session.session_id] = session
        logger.info("Created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def play(self, session_id: str, row: int, col: int) -> MoveResult | None:
        """Apply a move in a session. Returns None for an unknown session."""
        session = self.get_session(session_id)
        if session is None:
            return None
        return session.play(row, col, tally=self.tally)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.state = SessionState.ENDED
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions with no move for max_age_seconds.

        Returns how many were removed.
        """
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - (session.last_move_at or session.created_at) > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)

"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session/engine calls
2. Manages sessions and the win tally
3. Formats engine output (TileViews, outcomes) for display

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    MoveRequest,
    SessionResponse,
    GameStateResponse,
    MoveResponse,
    RulesResponse,
    ErrorResponse,
    TileInfo,
    TallyInfo,
    SessionStatus,
    OutcomeValue,
    ErrorCode,
)
from ..engine_core import Outcome, TileView
from ..render import (
    render_tile,
    turn_indicator,
    outcome_message,
    RULES_TITLE,
    RULES_TEXT,
)
from ..session import SessionManager, Session, WinTally


@dataclass
class APIService:
    """
    Main API service for a client UI.

    Usage:
        service = APIService()

        session = service.create_session()
        response = service.play_move(session.session_id, MoveRequest(row=0, col=0))
    """
    tally: WinTally | None = None
    session_manager: SessionManager | None = None

    def __post_init__(self):
        # The manager records wins, so its tally is the one the service reports.
        if self.session_manager is None:
            self.session_manager = SessionManager(tally=self.tally or WinTally())
        elif self.session_manager.tally is None:
            self.session_manager.tally = self.tally or WinTally()
        elif self.tally is not None and self.tally is not self.session_manager.tally:
            raise ValueError("tally and session_manager.tally must be the same WinTally")
        self.tally = self.session_manager.tally

    def create_session(self) -> SessionResponse:
        """Create a new game session."""
        session = self.session_manager.create_session()
        return SessionResponse(
            session_id=session.session_id,
            status=_status(session),
            created_at=session.created_at,
            state=self._state_response(session),
        )

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the full board for a session."""
        session = self.session_manager.get_session(session_id)
        if session is None:
            return _session_not_found(session_id)
        return self._state_response(session)

    def play_move(self, session_id: str, request: MoveRequest) -> MoveResponse | ErrorResponse:
        """
        Apply the current player's move.

        Rejected moves come back as ErrorResponse with the rejection code;
        the session is left exactly as it was.
        """
        session = self.session_manager.get_session(session_id)
        if session is None:
            return _session_not_found(session_id)

        result = self.session_manager.play(session_id, request.row, request.col)
        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=ErrorCode(result.error_code.value),
                details={"row": request.row, "col": request.col},
            )

        return MoveResponse(
            session_id=session_id,
            player=result.player.value,
            changed_tiles=[_tile_info(view) for view in result.changed_tiles],
            expansions=result.expansions,
            game_over=result.game_over,
            outcome=_outcome_value(result.outcome),
            message=outcome_message(result.outcome),
            next_player=result.next_player.value if result.next_player else None,
            turn_indicator=turn_indicator(result.next_player) if result.next_player else "",
            state_changes=result.state_changes,
            tally=self.get_tally() if result.game_over else None,
        )

    def reset_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Clear the board of a session."""
        session = self.session_manager.get_session(session_id)
        if session is None:
            return _session_not_found(session_id)
        session.reset()
        return self._state_response(session)

    def end_session(self, session_id: str) -> bool:
        """End a game session."""
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    def get_tally(self) -> TallyInfo:
        return TallyInfo(**self.tally.as_dict())

    def get_rules(self) -> RulesResponse:
        return RulesResponse(title=RULES_TITLE, text=RULES_TEXT)

    def _state_response(self, session: Session) -> GameStateResponse:
        engine = session.engine
        state = engine.state
        return GameStateResponse(
            session_id=session.session_id,
            status=_status(session),
            current_player=state.current_player.value,
            turn_indicator=turn_indicator(state.current_player),
            board=[[_tile_info(view) for view in row] for row in engine.board_view()],
            tile_counts={player.label: count for player, count in engine.tile_counts().items()},
            game_over=state.game_over,
            outcome=_outcome_value(state.outcome),
            message=outcome_message(state.outcome),
            move_count=state.move_count,
            games_played=session.games_played,
        )


def _tile_info(view: TileView) -> TileInfo:
    color, label = render_tile(view)
    return TileInfo(
        row=view.row,
        col=view.col,
        owner=view.owner.value if view.owner else None,
        points=view.points,
        color=color,
        label=label,
    )


def _outcome_value(outcome: Outcome | None) -> OutcomeValue | None:
    return OutcomeValue(outcome.value) if outcome else None


def _status(session: Session) -> SessionStatus:
    return SessionStatus(session.state.value)


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session not found: {session_id}",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )

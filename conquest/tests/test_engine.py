"""
Tests for the game engine (move application).

Tests:
- First-move conquest bonus
- Legality rules and rejections
- Turn handling
- Reset and tile queries
"""

import random

import pytest

from ..engine_core.state import GameState, Player, Outcome, OutOfBounds, EXPANSION_THRESHOLD
from ..engine_core.action import RejectionCode, TileView, Move
from ..engine_core.engine import GameEngine, apply_move, is_legal


class TestFirstMove:
    """Tests for the opening placement."""

    def test_first_move_claims_tile_with_three_points(self, engine):
        """Player 1's first move on an empty board claims the tile with 3 points."""
        result = engine.apply_move(0, 0)

        assert result.success
        assert engine.get_tile(0, 0) == TileView(0, 0, Player.PLAYER_1, 3)
        assert result.changed_tiles == [TileView(0, 0, Player.PLAYER_1, 3)]
        assert result.expansions == 0
        assert not result.game_over
        assert result.outcome is None
        assert result.next_player == Player.PLAYER_2
        assert engine.current_player == Player.PLAYER_2

    def test_first_move_clears_flag(self, engine):
        engine.apply_move(2, 2)

        assert not engine.state.first_move[Player.PLAYER_1]
        assert engine.state.first_move[Player.PLAYER_2]

    def test_second_player_first_move_anywhere(self, engine):
        """Player 2 may open on any empty tile."""
        engine.apply_move(0, 0)
        result = engine.apply_move(3, 1)

        assert result.success
        assert engine.get_tile(3, 1) == TileView(3, 1, Player.PLAYER_2, 3)
        assert engine.current_player == Player.PLAYER_1

    def test_first_move_may_take_opponent_tile(self, engine):
        """
        The first move ignores ownership: taking the opponent's 3-point tile
        gives 4 points, which expands straight away.
        """
        engine.apply_move(0, 0)
        result = engine.apply_move(0, 0)

        assert result.success
        assert result.player == Player.PLAYER_2
        assert result.expansions == 1
        assert engine.get_tile(0, 0) == TileView(0, 0, None, 0)
        assert engine.get_tile(0, 1) == TileView(0, 1, Player.PLAYER_2, 1)
        assert engine.get_tile(1, 0) == TileView(1, 0, Player.PLAYER_2, 1)
        assert result.outcome == Outcome.PLAYER_2_WINS


class TestLegality:
    """Tests for move validation."""

    def test_opponent_tile_rejected(self, opened_engine):
        """Placing on the opponent's tile is ignored and the turn stays."""
        before = opened_engine.state.copy()

        result = opened_engine.apply_move(4, 4)

        assert not result.success
        assert result.error_code == RejectionCode.NOT_YOUR_TILE
        assert opened_engine.state == before
        assert opened_engine.current_player == Player.PLAYER_1

    def test_empty_tile_rejected_after_first_move(self, opened_engine):
        """After the first move only your own tiles can be played."""
        before = opened_engine.state.copy()

        result = opened_engine.apply_move(2, 2)

        assert not result.success
        assert result.error_code == RejectionCode.NOT_YOUR_TILE
        assert opened_engine.state == before

    def test_own_tile_increments(self, opened_engine):
        """A later move on your own tile adds one point (and may expand)."""
        opened_engine.state.board.tile(0, 0).points = 1

        result = opened_engine.apply_move(0, 0)

        assert result.success
        assert opened_engine.get_tile(0, 0).points == 2

    def test_out_of_bounds_rejected(self, engine):
        """Off-board moves are rejected without touching the state."""
        for row, col in [(-1, 0), (0, 5), (5, 5)]:
            result = engine.apply_move(row, col)
            assert not result.success
            assert result.error_code == RejectionCode.OUT_OF_BOUNDS

        assert engine.state == GameState.fresh()

    def test_move_after_game_over_rejected(self, engine):
        engine.apply_move(0, 0)
        engine.state.current_player = Player.PLAYER_1
        engine.apply_move(0, 0)
        assert engine.game_over
        before = engine.state.copy()

        result = engine.apply_move(0, 1)

        assert not result.success
        assert result.error_code == RejectionCode.GAME_OVER
        assert result.game_over
        assert result.outcome == Outcome.PLAYER_1_WINS
        assert engine.state == before

    def test_is_legal(self, opened_engine):
        state = opened_engine.state
        assert is_legal(state, 0, 0)
        assert not is_legal(state, 4, 4)
        assert not is_legal(state, 2, 2)
        assert not is_legal(state, 9, 9)


class TestExpansionThroughMoves:
    """Tests for expansions triggered by placements."""

    def test_repeated_placement_expands(self, engine):
        """
        Player 1 plays (0, 0) again (turn order ignored): 3 -> 4 expands into
        (0, 1) and (1, 0); off-board neighbours are skipped.
        """
        engine.apply_move(0, 0)
        engine.state.current_player = Player.PLAYER_1

        result = engine.apply_move(0, 0)

        assert result.success
        assert result.expansions == 1
        assert engine.get_tile(0, 0) == TileView(0, 0, None, 0)
        assert engine.get_tile(0, 1) == TileView(0, 1, Player.PLAYER_1, 1)
        assert engine.get_tile(1, 0) == TileView(1, 0, Player.PLAYER_1, 1)
        assert result.changed_tiles == [
            TileView(0, 0, None, 0),
            TileView(0, 1, Player.PLAYER_1, 1),
            TileView(1, 0, Player.PLAYER_1, 1),
        ]
        # Player 2 has no tiles and Player 1 holds two
        assert result.game_over
        assert result.outcome == Outcome.PLAYER_1_WINS
        assert engine.current_player == Player.PLAYER_1
        assert result.next_player is None

    def test_expansion_in_regular_game(self, opened_engine):
        """Same expansion with Player 2 on the board: the game goes on."""
        result = opened_engine.apply_move(0, 0)

        assert result.success
        assert result.expansions == 1
        assert not result.game_over
        assert opened_engine.current_player == Player.PLAYER_2
        assert opened_engine.tile_counts() == {Player.PLAYER_1: 2, Player.PLAYER_2: 1}

    def test_cascade_is_depth_first(self, make_state):
        """
        (0, 0) expands into (0, 1), which expands before (0, 0) visits its
        lower neighbour.
        """
        state = make_state([
            "A3 A3 .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  B1",
        ])

        result = apply_move(state, 0, 0)

        assert result.expansions == 2
        assert [(v.row, v.col) for v in result.changed_tiles] == [
            (0, 0), (0, 1), (0, 2), (1, 1), (1, 0),
        ]
        board = state.board
        assert board.tile(0, 0).owner == Player.PLAYER_1 and board.tile(0, 0).points == 1
        assert board.tile(0, 1).owner is None and board.tile(0, 1).points == 0
        assert board.tile(0, 2).points == 1
        assert board.tile(1, 1).points == 1
        assert board.tile(1, 0).points == 1
        assert "Tile (0, 1) expanded" in result.state_changes


class TestWinThroughMoves:
    """Tests for game endings reached by playing."""

    def test_elimination_win(self, make_state):
        """Player 2 wipes out Player 1's last tile."""
        state = make_state([
            "A1 B3 .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  .",
            ".  .  .  .  B1",
        ], current=Player.PLAYER_2)

        result = apply_move(state, 0, 1)

        assert result.game_over
        assert result.outcome == Outcome.PLAYER_2_WINS
        assert state.game_over
        assert state.board.tile(0, 0).owner == Player.PLAYER_2
        assert state.current_player == Player.PLAYER_2
        assert result.state_changes[-1] == "Player 2 wins!"

    def test_draw_when_last_tile_is_filled(self, make_state):
        """Player 2's opening fills the last empty tile: a draw."""
        state = make_state([
            "A1 B1 A1 B1 A1",
            "B1 A1 B1 A1 B1",
            "A1 B1 .  B1 A1",
            "B1 A1 B1 A1 B1",
            "A1 B1 A1 B1 A1",
        ], current=Player.PLAYER_2,
           first_move={Player.PLAYER_1: False, Player.PLAYER_2: True})

        result = apply_move(state, 2, 2)

        assert result.success
        assert result.game_over
        assert result.outcome == Outcome.DRAW
        assert result.state_changes[-1] == "It's a draw!"


class TestQueries:
    """Tests for read-only queries and reset."""

    def test_get_tile_out_of_bounds(self, engine):
        with pytest.raises(OutOfBounds):
            engine.get_tile(5, 0)
        with pytest.raises(IndexError):
            engine.get_tile(0, -1)

    def test_board_view_shape(self, opened_engine):
        view = opened_engine.board_view()

        assert len(view) == 5
        assert all(len(row) == 5 for row in view)
        assert view[4][4] == TileView(4, 4, Player.PLAYER_2, 3)

    def test_reset_restores_fresh_state(self, opened_engine):
        opened_engine.apply_move(0, 0)

        assert opened_engine.reset() is True
        assert opened_engine.state == GameState.fresh()

        # Reset twice is the same as once
        opened_engine.reset()
        assert opened_engine.state == GameState.fresh()

    def test_reset_after_game_over(self, engine):
        engine.apply_move(0, 0)
        engine.state.current_player = Player.PLAYER_1
        engine.apply_move(0, 0)
        assert engine.game_over

        engine.reset()

        assert not engine.game_over
        assert engine.outcome is None
        assert engine.apply_move(1, 1).success

    def test_play_move_object(self, engine):
        result = engine.play(Move(row=2, col=3))
        assert result.success
        assert engine.get_tile(2, 3).points == 3


class TestSettledBoard:
    """Board invariants over whole games."""

    @pytest.mark.parametrize("seed", [1, 7, 42, 1234])
    def test_points_settle_below_threshold(self, seed):
        """After every move, points are in [0, 4) and empty tiles hold 0."""
        rng = random.Random(seed)
        engine = GameEngine()

        for _ in range(400):
            if engine.game_over:
                break
            legal = [
                (r, c) for r in range(5) for c in range(5)
                if is_legal(engine.state, r, c)
            ]
            if not legal:
                break
            row, col = rng.choice(legal)

            result = engine.apply_move(row, col)
            assert result.success

            for tile_row in engine.board_view():
                for view in tile_row:
                    assert 0 <= view.points < EXPANSION_THRESHOLD
                    if view.owner is None:
                        assert view.points == 0

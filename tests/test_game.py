import logging

import numpy as np
import pytest

from tileslide.board import Board
from tileslide.config import GameConfig
from tileslide.game import Game, GameState, InvariantViolation, KeyEvent


def make_game(rows=None, **config):
    game = Game(GameConfig(**config), rng=np.random.default_rng(99))
    if rows is not None:
        game.board = Board.from_rows(rows, rng=game.rng, chance_for_2=game.config.chance_for_2)
        game.state = GameState.GAME_OVER if game.board.is_game_over() else GameState.PLAYING
    return game


STUCK = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


class TestStart:
    def test_fresh_game_has_one_tile(self):
        game = make_game()
        assert game.state is GameState.PLAYING
        assert int(np.count_nonzero(game.board.values)) == 1
        assert game.board.last_spawn is not None
        assert game.board.score == 0

    def test_initial_tiles_is_configurable(self):
        game = make_game(initial_tiles=3)
        assert int(np.count_nonzero(game.board.values)) == 3

    def test_one_by_one_board_starts_game_over(self):
        game = make_game(height=1, width=1)
        assert game.state is GameState.GAME_OVER


class TestPlaying:
    def test_successful_move_spawns_a_tile(self):
        game = make_game([[2, 2, 0, 0], [0, 0, 0, 0]], height=2)
        assert game.handle(KeyEvent.LEFT) is GameState.PLAYING
        assert game.board.get_cell(0, 0) == 4
        assert int(np.count_nonzero(game.board.values)) == 2
        assert game.board.score == 1
        assert game.moves == 1

    def test_failed_move_does_not_spawn(self):
        game = make_game([[2, 0], [0, 0]])
        game.handle(KeyEvent.LEFT)
        assert game.board.to_list() == [[2, 0], [0, 0]]
        assert game.moves == 0

    def test_other_keys_are_ignored(self):
        game = make_game([[2, 0], [0, 0]])
        assert game.handle(KeyEvent.OTHER) is GameState.PLAYING
        assert game.board.to_list() == [[2, 0], [0, 0]]

    def test_move_into_stuck_board_ends_game(self):
        # the only empty cell left after the move gets a 4
        rows = [
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [8, 16, 32, 32],
        ]
        game = make_game(rows, chance_for_2=0.0)
        game.handle(KeyEvent.RIGHT)
        assert game.board.to_list()[3] == [4, 8, 16, 64]
        assert game.state is GameState.GAME_OVER


class TestGameOver:
    def test_moves_are_ignored(self):
        game = make_game(STUCK)
        assert game.state is GameState.GAME_OVER
        for event in (KeyEvent.UP, KeyEvent.DOWN, KeyEvent.LEFT, KeyEvent.RIGHT, KeyEvent.OTHER):
            assert game.handle(event) is GameState.GAME_OVER
        assert game.board.to_list() == STUCK

    def test_restart_from_game_over(self):
        game = make_game(STUCK)
        assert game.handle(KeyEvent.RESTART) is GameState.PLAYING
        assert int(np.count_nonzero(game.board.values)) == 1
        assert game.board.score == 0

    def test_snapshot_flags_game_over(self):
        game = make_game(STUCK)
        assert game.snapshot().game_over is True


class TestRestartAndQuit:
    def test_restart_while_playing_discards_board(self):
        game = make_game([[2, 2], [0, 0]])
        old = game.board
        game.handle(KeyEvent.RESTART)
        assert game.board is not old
        assert game.state is GameState.PLAYING

    def test_quit_releases_board(self):
        game = make_game()
        assert game.handle(KeyEvent.QUIT) is GameState.EXIT
        assert game.board is None

    def test_quit_from_game_over(self):
        game = make_game(STUCK)
        assert game.handle(KeyEvent.QUIT) is GameState.EXIT

    def test_exit_is_final(self):
        game = make_game()
        game.handle(KeyEvent.QUIT)
        assert game.handle(KeyEvent.RESTART) is GameState.EXIT
        assert game.board is None


class TestSpawnFailure:
    def test_logged_and_ignored_by_default(self, caplog):
        game = make_game([[2, 2], [0, 0]])
        game.board.spawn = lambda: False
        with caplog.at_level(logging.ERROR, logger="tileslide.game"):
            game.handle(KeyEvent.LEFT)
        assert "no empty cell" in caplog.text
        assert game.state is GameState.PLAYING

    def test_strict_mode_raises(self):
        game = make_game([[2, 2], [0, 0]], strict=True)
        game.board.spawn = lambda: False
        with pytest.raises(InvariantViolation):
            game.handle(KeyEvent.LEFT)


class TestRun:
    def test_scripted_session(self):
        game = make_game([[2, 2, 0, 0], [0, 0, 0, 0]], height=2)
        events = iter([KeyEvent.LEFT, KeyEvent.OTHER, KeyEvent.RESTART, KeyEvent.QUIT])
        frames = []

        code = game.run(lambda: next(events), frames.append)

        assert code == 0
        assert game.state is GameState.EXIT
        # initial frame plus one per event before quit
        assert len(frames) == 4
        assert frames[0].values[0] == (2, 2, 0, 0)
        assert frames[1].values[0][0] == 4
        assert frames[1].score == 1
        assert frames[3].score == 0

    def test_game_over_frames_are_flagged(self):
        game = make_game(STUCK)
        events = iter([KeyEvent.LEFT, KeyEvent.QUIT])
        frames = []
        game.run(lambda: next(events), frames.append)
        assert [f.game_over for f in frames] == [True, True]

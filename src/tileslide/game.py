"""
game loop: turns key events into board moves and tracks the session state
"""
from enum import Enum

from tileslide.board import Direction
from tileslide.config import GameConfig
from tileslide.logging_config import get_logger


logger = get_logger(__name__)


class GameState(Enum):
    PLAYING = 'playing'
    GAME_OVER = 'game_over'
    EXIT = 'exit'


class KeyEvent(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'
    RESTART = 'restart'
    QUIT = 'quit'
    OTHER = 'other'


MOVES = {
    KeyEvent.UP: Direction.UP,
    KeyEvent.DOWN: Direction.DOWN,
    KeyEvent.LEFT: Direction.LEFT,
    KeyEvent.RIGHT: Direction.RIGHT,
}


class InvariantViolation(RuntimeError):
    """the board reached a state the rules say is impossible"""


class Game:
    """
    one playing session

    the board is created on start and on every restart, and dropped on quit
    """

    def __init__(self, config=None, rng=None):
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else self.config.make_rng()
        self.board = None
        self.state = GameState.PLAYING
        self.moves = 0
        self.restart()

    @property
    def game_over(self):
        return self.state is GameState.GAME_OVER

    def restart(self):
        """discard the board and start over"""
        self.board = self.config.new_board(self.rng)
        for _ in range(self.config.initial_tiles):
            self.board.spawn()
        self.moves = 0
        self.state = GameState.PLAYING
        logger.debug("new %dx%d board", self.config.height, self.config.width)

        # a 1x1 board is finished as soon as it has a tile
        self._check_game_over()

    def handle(self, event):
        """apply one key event and return the resulting state"""
        if self.state is GameState.EXIT:
            return self.state

        if event is KeyEvent.QUIT:
            logger.debug("quit with score %d", self.board.score)
            self.board = None
            self.state = GameState.EXIT
        elif event is KeyEvent.RESTART:
            self.restart()
        elif self.state is GameState.PLAYING and event in MOVES:
            self.play(MOVES[event])

        return self.state

    def play(self, direction):
        """move, spawn on success, then look for the end of the game"""
        moved = self.board.move(direction)
        if moved:
            self.moves += 1
            if not self.board.spawn():
                self._spawn_failed(direction)
        self._check_game_over()
        return moved

    def _check_game_over(self):
        if self.board.is_game_over():
            self.state = GameState.GAME_OVER
            logger.info("game over after %d moves, score %d, max tile %d",
                        self.moves, self.board.score, self.board.max_tile())

    def _spawn_failed(self, direction):
        message = f"no empty cell to spawn into after moving {Direction(direction).value}"
        if self.config.strict:
            raise InvariantViolation(message)
        logger.error(message)

    def snapshot(self):
        return self.board.snapshot(game_over=self.game_over)

    def run(self, read_input, render):
        """
        drive the session until quit

        args:
            read_input: blocking callable returning the next KeyEvent
            render: callable taking a BoardSnapshot

        returns:
            process exit code
        """
        render(self.snapshot())
        while self.state is not GameState.EXIT:
            self.handle(read_input())
            if self.state is not GameState.EXIT:
                render(self.snapshot())
        return 0

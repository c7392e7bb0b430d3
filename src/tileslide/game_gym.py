import gymnasium as gym
from gymnasium import spaces
import numpy as np

from tileslide.board import Board, CHANCE_FOR_2, Direction


class TileSlideEnv(gym.Env):
    """
    gymnasium environment over the board engine

    afterstate learning framework:
    - observation is the board after the random tile was placed
    - get_afterstate() gives the board after the move, before the random tile
    - reward is the value of the tiles merged by the move
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, height=4, width=4, chance_for_2=CHANCE_FOR_2, initial_tiles=2, render_mode=None):
        super().__init__()

        self.height = height
        self.width = width
        self.chance_for_2 = chance_for_2
        self.initial_tiles = initial_tiles
        self.render_mode = render_mode

        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # raw tile values (not log2), so tuple networks can read them directly
        self.observation_space = spaces.Box(
            low=0,
            high=2 ** 17,
            shape=(height, width),
            dtype=np.int64
        )

        self.action_to_direction = {
            0: Direction.UP,
            1: Direction.DOWN,
            2: Direction.LEFT,
            3: Direction.RIGHT
        }

        self.board = self._new_board()
        self.last_afterstate = None

    def _new_board(self):
        board = Board(self.height, self.width, self.chance_for_2, rng=self.np_random)
        for _ in range(self.initial_tiles):
            board.spawn()
        return board

    def _get_observation(self):
        return self.board.values.copy()

    def get_afterstate(self, action):
        """
        board after the player's move but before the random tile

        returns:
            afterstate_board: board after the move, None if the move is invalid
            reward: points earned from merging
            valid: if the move changed the board
        """
        trial = self.board.copy()
        if not trial.move(self.action_to_direction[action]):
            return None, 0, False
        return trial.values.copy(), trial.last_move_points, True

    def reset(self, seed=None, options=None):
        """start a new episode"""
        super().reset(seed=seed)

        self.board = self._new_board()
        self.last_afterstate = None

        info = {"score": self.board.score}
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), info

    def step(self, action):
        """apply one move, spawn on success and report the TD learning info"""
        direction = self.action_to_direction[int(action)]

        moved = self.board.move(direction)
        points = self.board.last_move_points if moved else 0
        afterstate = self.board.values.copy() if moved else None

        if moved:
            self.board.spawn()
            self.last_afterstate = afterstate

        reward = float(points)
        terminated = self.board.is_game_over()
        truncated = False

        info = {
            "score": self.board.score,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate,
            "max_tile": self.board.max_tile(),
            "last_spawn": self.board.last_spawn,
        }

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        if self.render_mode == "ansi":
            return str(self.board)
        if self.render_mode == "human":
            print(self.board)
            print()
        return None

    def close(self):
        self.board = None

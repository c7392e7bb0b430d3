"""
board engine: grid state, directional moves with merging and tile spawning
"""
import copy
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


CHANCE_FOR_2 = 0.8
COLOR_CLASSES = 14


class Direction(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def vector(self):
        """(dy, dx) unit vector of the move"""
        return _VECTORS[self]


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

# probe order used by the game over check
_PROBE_ORDER = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


def color_class(value, n_classes=COLOR_CLASSES):
    """display class of a tile: floor(log2(value)) mod n_classes, 0 for empty"""
    value = int(value)
    if value <= 0:
        return 0
    return (value.bit_length() - 1) % n_classes


@dataclass(frozen=True)
class BoardSnapshot:
    """settled board state handed to the presentation layer"""
    width: int
    height: int
    values: Tuple[Tuple[int, ...], ...]
    colors: Tuple[Tuple[int, ...], ...]
    last_spawn: Optional[Tuple[int, int]]
    score: int
    game_over: bool = False

    def is_last_spawn(self, y, x):
        return self.last_spawn == (y, x)


class Board:
    """
    rectangular 2048 grid

    in simulation mode every cell write is a no-op, so moves can be probed
    (game over detection) without touching cells or score
    """

    def __init__(self, height=4, width=4, chance_for_2=CHANCE_FOR_2,
                 color_classes=COLOR_CLASSES, rng=None):
        if height < 1 or width < 1:
            raise ValueError(f"Board size must be at least 1x1, got {height}x{width}")
        if not 0.0 <= chance_for_2 <= 1.0:
            raise ValueError(f"chance_for_2 must be within [0, 1], got {chance_for_2}")
        if color_classes < 1:
            raise ValueError(f"color_classes must be positive, got {color_classes}")

        self.height = height
        self.width = width
        self.chance_for_2 = chance_for_2
        self.color_classes = color_classes
        self.rng = rng if rng is not None else np.random.default_rng()

        self.values = np.zeros((height, width), dtype=np.int64)
        self.colors = np.zeros((height, width), dtype=np.int16)
        self.score = 0
        self.last_spawn_y = None
        self.last_spawn_x = None
        # merged tile values of the last real move (reward signal only)
        self.last_move_points = 0
        self._simulation = False

    @classmethod
    def from_rows(cls, rows, **kwargs):
        """build a board from nested lists of tile values"""
        rows = [list(row) for row in rows]
        board = cls(height=len(rows), width=len(rows[0]) if rows else 0, **kwargs)
        for y, row in enumerate(rows):
            if len(row) != board.width:
                raise ValueError("All rows must have the same length")
            for x, value in enumerate(row):
                board.set_cell(y, x, value)
        return board

    def copy(self):
        """independent board with the same cells, score and generator state"""
        other = Board(self.height, self.width, self.chance_for_2, self.color_classes,
                      rng=copy.deepcopy(self.rng))
        other.values = self.values.copy()
        other.colors = self.colors.copy()
        other.score = self.score
        other.last_spawn_y = self.last_spawn_y
        other.last_spawn_x = self.last_spawn_x
        other.last_move_points = self.last_move_points
        return other

    # --- simulation mode ---

    @property
    def simulation(self):
        return self._simulation

    @contextmanager
    def simulated(self):
        """suppress all cell writes and scoring inside the block"""
        previous = self._simulation
        self._simulation = True
        try:
            yield self
        finally:
            self._simulation = previous

    # --- cells ---

    def set_cell(self, y, x, value):
        if self._simulation:
            return
        self.values[y, x] = value
        self.colors[y, x] = color_class(value, self.color_classes)

    def get_cell(self, y, x):
        return int(self.values[y, x])

    def get_color(self, y, x):
        return int(self.colors[y, x])

    def empty_cells(self):
        """(y, x) of every empty cell, row-major"""
        return [divmod(int(i), self.width) for i in np.flatnonzero(self.values == 0)]

    def max_tile(self):
        return int(self.values.max())

    def _in_bounds(self, y, x):
        return 0 <= y < self.height and 0 <= x < self.width

    # --- moves ---

    def move(self, direction):
        """
        move all tiles in a direction ('up', 'down', 'left', 'right')

        returns True if any tile slid or merged
        """
        dy, dx = Direction(direction).vector
        return self.move_vector(dy, dx)

    def move_vector(self, dy, dx):
        if abs(dy) + abs(dx) != 1:
            raise ValueError(f"Invalid direction vector: ({dy}, {dx})")

        # lines run across the major axis, cells within a line along the minor axis
        if dy != 0:
            major_size, minor_size = self.width, self.height
        else:
            major_size, minor_size = self.height, self.width

        if minor_size < 2:
            return False

        # cells nearest the target edge go first so they become merge targets
        from_far_end = dy == 1 or dx == 1
        merged = np.zeros(minor_size, dtype=bool)
        moved = False
        points = 0

        for major in range(major_size):
            merged[:] = False
            for step in range(minor_size):
                minor = minor_size - 1 - step if from_far_end else step
                if dy != 0:
                    y, x = minor, major
                else:
                    y, x = major, minor
                cell_moved, cell_points = self._shift_cell(y, x, dy, dx, merged)
                moved |= cell_moved
                points += cell_points

        if not self._simulation:
            # one point per successful move, whatever merged
            self.score += int(moved)
            self.last_move_points = points
        return moved

    def _shift_cell(self, y, x, dy, dx, merged):
        """slide one tile as far as it goes, then try a single merge"""
        value = self.get_cell(y, x)
        if value == 0:
            return False, 0

        ty, tx = y, x
        while self._in_bounds(ty + dy, tx + dx) and self.values[ty + dy, tx + dx] == 0:
            ty += dy
            tx += dx

        ny, nx = ty + dy, tx + dx
        if self._in_bounds(ny, nx) and self.values[ny, nx] == value:
            line_index = ny if dy != 0 else nx
            if not merged[line_index]:
                merged[line_index] = True
                self.set_cell(ny, nx, value * 2)
                self.set_cell(y, x, 0)
                return True, value * 2

        if (ty, tx) == (y, x):
            return False, 0

        self.set_cell(ty, tx, value)
        self.set_cell(y, x, 0)
        return True, 0

    def is_game_over(self):
        """check if no direction can move anything (probed in simulation)"""
        with self.simulated():
            return not any(self.move(direction) for direction in _PROBE_ORDER)

    # --- spawning ---

    def spawn(self):
        """
        place a 2 (chance_for_2) or a 4 into a random empty cell

        returns False if the board is full
        """
        empty = np.flatnonzero(self.values == 0)
        if empty.size == 0:
            return False

        index = int(empty[self.rng.integers(empty.size)])
        y, x = divmod(index, self.width)
        value = 2 if self.rng.random() < self.chance_for_2 else 4

        self.last_spawn_y = y
        self.last_spawn_x = x
        self.set_cell(y, x, value)
        return True

    @property
    def last_spawn(self):
        if self.last_spawn_y is None:
            return None
        return (self.last_spawn_y, self.last_spawn_x)

    # --- views ---

    def snapshot(self, game_over=False):
        return BoardSnapshot(
            width=self.width,
            height=self.height,
            values=tuple(tuple(int(v) for v in row) for row in self.values),
            colors=tuple(tuple(int(c) for c in row) for row in self.colors),
            last_spawn=self.last_spawn,
            score=self.score,
            game_over=game_over,
        )

    def to_list(self):
        return self.values.tolist()

    def __str__(self):
        cell_width = max(4, len(str(self.max_tile())))
        border = "-" * ((cell_width + 1) * self.width + 1)
        lines = [f"Score: {self.score}", border]
        for row in self.values:
            cells = [" " * cell_width if v == 0 else f"{int(v):{cell_width}}" for v in row]
            lines.append("|" + "|".join(cells) + "|")
        lines.append(border)
        return "\n".join(lines)

    def __repr__(self):
        return f"Board(height={self.height}, width={self.width}, score={self.score})"

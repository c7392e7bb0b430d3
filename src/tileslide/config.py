"""
game configuration
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tileslide.board import Board, CHANCE_FOR_2, COLOR_CLASSES


@dataclass
class GameConfig:
    """
    settings for one game session

    args:
        height, width: board size
        chance_for_2: probability that a spawned tile is a 2 (otherwise 4)
        initial_tiles: tiles spawned on a fresh board
        color_classes: number of display color classes (palette size)
        seed: seed for the spawn generator, None for a random one
        strict: raise on invariant violations instead of logging them
    """
    height: int = 4
    width: int = 4
    chance_for_2: float = CHANCE_FOR_2
    initial_tiles: int = 1
    color_classes: int = COLOR_CLASSES
    seed: Optional[int] = None
    strict: bool = False

    def __post_init__(self):
        if self.height < 1 or self.width < 1:
            raise ValueError(f"Board size must be at least 1x1, got {self.height}x{self.width}")
        if not 0.0 <= self.chance_for_2 <= 1.0:
            raise ValueError(f"chance_for_2 must be within [0, 1], got {self.chance_for_2}")
        if self.initial_tiles < 0:
            raise ValueError(f"initial_tiles cannot be negative, got {self.initial_tiles}")
        if self.color_classes < 1:
            raise ValueError(f"color_classes must be positive, got {self.color_classes}")

    def make_rng(self):
        return np.random.default_rng(self.seed)

    def new_board(self, rng):
        return Board(
            height=self.height,
            width=self.width,
            chance_for_2=self.chance_for_2,
            color_classes=self.color_classes,
            rng=rng,
        )


def parse_size(text):
    """parse 'HxW' (or a single number for a square board) into (height, width)"""
    parts = text.lower().split('x')
    if len(parts) == 1:
        parts = parts * 2
    if len(parts) != 2:
        raise ValueError(f"Board size must look like 4x4, got {text!r}")
    try:
        height, width = (int(part) for part in parts)
    except ValueError:
        raise ValueError(f"Board size must look like 4x4, got {text!r}") from None
    if height < 1 or width < 1:
        raise ValueError(f"Board size must be at least 1x1, got {text!r}")
    return height, width

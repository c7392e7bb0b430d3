"""
tileslide: a 2048-style sliding tile game for the terminal
"""
from tileslide.board import Board, BoardSnapshot, Direction, color_class
from tileslide.config import GameConfig
from tileslide.game import Game, GameState, InvariantViolation, KeyEvent

__version__ = "0.1.0"

__all__ = [
    "Board",
    "BoardSnapshot",
    "Direction",
    "Game",
    "GameConfig",
    "GameState",
    "InvariantViolation",
    "KeyEvent",
    "color_class",
]

import sys, os

import numpy as np
import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tileslide.board import Board


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_board(rng):
    """build a board from rows with a seeded generator"""
    def _make(rows, **kwargs):
        kwargs.setdefault("rng", rng)
        return Board.from_rows(rows, **kwargs)
    return _make

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from lightsout.core.grid import create_solved, toggle
from lightsout.core.session import SessionRecord


@pytest.fixture
def make_record():
    """Build a finished-game record for an n x n board"""
    def _make(time_spent, grid_size=5, moves=10, timestamp=None):
        initial = toggle(create_solved(grid_size), 0, 0)
        return SessionRecord.create(initial, time_spent, moves, timestamp=timestamp)
    return _make

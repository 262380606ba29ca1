from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from game.config import GameConfig  # noqa: E402
from game.food import FoodPlacer  # noqa: E402


class ScriptedPlacer:
    """Food placer that hands out a fixed sequence of cells, then None."""

    def __init__(self, *cells):
        self.cells = list(cells)
        self.calls = []

    def place(self, snake):
        self.calls.append(tuple(snake))
        return self.cells.pop(0) if self.cells else None


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(seed=1234)


@pytest.fixture
def placer(config) -> FoodPlacer:
    return FoodPlacer(grid_size=config.grid_size, rng=random.Random(config.seed))

"""Grid Snake simulation engine."""

from game.config import GameConfig, load_config
from game.controller import InputController
from game.engine import new_game, step
from game.food import FoodPlacer
from game.scheduler import TickScheduler
from game.session import GameSession
from game.state import Direction, GameState, Position, Status

__all__ = [
    "Direction",
    "FoodPlacer",
    "GameConfig",
    "GameSession",
    "GameState",
    "InputController",
    "Position",
    "Status",
    "TickScheduler",
    "load_config",
    "new_game",
    "step",
]

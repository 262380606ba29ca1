from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

Position = Tuple[int, int]


class Direction(Enum):
    """Cardinal movement directions. Values are (dx, dy), y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Position:
        return self.value

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by name, case-insensitive ("up", "Up", "UP")."""
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown direction: {name!r}") from None


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a Snake game.

    Every transition returns a new GameState; nothing mutates one in place,
    so renderers can hold on to a snapshot safely.
    """

    snake: Tuple[Position, ...]  # head first
    food: Optional[Position]  # None only when the board has no free cell
    direction: Direction = Direction.RIGHT  # already applied
    pending_direction: Direction = Direction.RIGHT
    status: Status = Status.RUNNING
    score: int = 0
    high_score: int = 0
    grid_size: int = 20

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def game_over(self) -> bool:
        return self.status is Status.GAME_OVER

    def evolve(self, **changes: Any) -> GameState:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]} if self.food is not None else None,
            "direction": self.direction.name.lower(),
            "status": self.status.value,
            "score": self.score,
            "high_score": self.high_score,
            "grid_size": self.grid_size,
        }

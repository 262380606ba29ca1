import logging
import random
from typing import Callable, List, Optional

from . import controller, engine
from .config import GameConfig
from .food import FoodPlacer
from .scheduler import TickScheduler
from .state import Direction, GameState, Status

logger = logging.getLogger(__name__)

Subscriber = Callable[[GameState], None]


class GameSession:
    """Owns one game: its state, food placer, tick scheduler and subscribers.

    The scheduler is armed by start(), stopped on game over, re-armed on
    reset and cancelled by close(). Pausing leaves it armed; ticks are
    no-ops until the game resumes.
    """

    def __init__(self, config: Optional[GameConfig] = None, placer: Optional[FoodPlacer] = None):
        self.config = config or GameConfig()
        self.placer = placer or FoodPlacer(
            grid_size=self.config.grid_size,
            max_attempts=self.config.max_food_attempts,
            dense_ratio=self.config.dense_ratio,
            rng=random.Random(self.config.seed),
        )
        self.scheduler = TickScheduler(self.tick, period=self.config.tick_seconds)
        self._subscribers: List[Subscriber] = []
        self._started = False
        self.state = engine.new_game(self.config, self.placer)

    def snapshot(self) -> GameState:
        return self.state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every new state.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self) -> None:
        self._started = True
        if self.state.status is not Status.GAME_OVER:
            self.scheduler.start()
        logger.info("Session started (grid=%d, tick=%dms)", self.config.grid_size, self.config.tick_ms)

    async def close(self) -> None:
        self._started = False
        self._subscribers.clear()
        await self.scheduler.aclose()
        logger.info("Session closed")

    def tick(self) -> None:
        previous = self.state
        self._update(engine.step(previous, self.placer, self.config.score_increment))
        if self.state.game_over and not previous.game_over:
            self.scheduler.stop()

    def request_direction(self, direction: Direction) -> None:
        self._update(controller.request_direction(self.state, direction))

    def toggle_pause(self) -> None:
        self._update(controller.toggle_pause(self.state))

    def request_reset(self) -> None:
        logger.info("Resetting game (high_score=%d)", self.state.high_score)
        self._update(engine.new_game(self.config, self.placer, high_score=self.state.high_score), force=True)
        if self._started:
            self.scheduler.start()

    def _update(self, state: GameState, force: bool = False) -> None:
        if state is self.state and not force:
            return
        self.state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("State subscriber %r failed", callback)

"""Validated input transitions and key bindings."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .state import Direction, GameState, Status

if TYPE_CHECKING:
    from .session import GameSession


def request_direction(state: GameState, direction: Direction) -> GameState:
    """Queue a direction for the next tick.

    A 180-degree turn relative to the applied direction is ignored, as is
    any request once the game is over or one that changes nothing. Reversal
    is judged against the applied direction, not the pending one, so several
    requests inside one tick are each checked against the same applied
    direction and the last valid one wins.
    """
    if state.status is Status.GAME_OVER:
        return state
    if direction is state.pending_direction or direction is state.direction.opposite:
        return state
    return state.evolve(pending_direction=direction)


def toggle_pause(state: GameState) -> GameState:
    if state.status is Status.RUNNING:
        return state.evolve(status=Status.PAUSED)
    if state.status is Status.PAUSED:
        return state.evolve(status=Status.RUNNING)
    return state


class InputController:
    """Maps keyboard keys onto session operations."""

    KEY_DIRECTIONS = {
        "ArrowUp": Direction.UP,
        "ArrowDown": Direction.DOWN,
        "ArrowLeft": Direction.LEFT,
        "ArrowRight": Direction.RIGHT,
    }
    PAUSE_KEYS = (" ", "Space")
    RESET_KEYS = ("r", "R")

    def __init__(self, session: GameSession):
        self.session = session
        self._actions: dict[str, Callable[[], None]] = {}
        for key in self.PAUSE_KEYS:
            self._actions[key] = session.toggle_pause
        for key in self.RESET_KEYS:
            self._actions[key] = session.request_reset

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press.

        Returns:
            True if the key is bound, False if it was ignored
        """
        direction = self.KEY_DIRECTIONS.get(key)
        if direction is not None:
            self.session.request_direction(direction)
            return True

        action = self._actions.get(key)
        if action is None:
            return False
        action()
        return True

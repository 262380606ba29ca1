import logging

from .config import GameConfig
from .food import FoodPlacer
from .state import Direction, GameState, Position, Status

logger = logging.getLogger(__name__)


def new_game(config: GameConfig, placer: FoodPlacer, high_score: int = 0) -> GameState:
    """Create the initial state: one segment in the center, facing right.

    Args:
        config: Game configuration
        placer: Food placer for the first food
        high_score: Best score so far in this process, carried across resets

    Returns:
        The initial GameState
    """
    center = config.grid_size // 2
    snake = ((center, center),)
    return GameState(
        snake=snake,
        food=placer.place(snake),
        direction=Direction.RIGHT,
        pending_direction=Direction.RIGHT,
        status=Status.RUNNING,
        score=0,
        high_score=high_score,
        grid_size=config.grid_size,
    )


def _hits_wall(state: GameState, position: Position) -> bool:
    x, y = position
    return not (0 <= x < state.grid_size and 0 <= y < state.grid_size)


def _hits_body(state: GameState, position: Position) -> bool:
    # Checked against the pre-move body, tail included: stepping onto the
    # cell the tail is about to leave still counts as a collision.
    return position in state.snake[1:]


def end_game(state: GameState) -> GameState:
    """Transition to GameOver, recording the high score."""
    high_score = max(state.high_score, state.score)
    logger.info("Game over: score=%d high_score=%d length=%d", state.score, high_score, len(state.snake))
    return state.evolve(status=Status.GAME_OVER, high_score=high_score)


def step(state: GameState, placer: FoodPlacer, score_increment: int = 10) -> GameState:
    """Advance the game by one tick.

    Paused and finished games are returned unchanged.

    Args:
        state: Current state
        placer: Food placer used when the snake eats
        score_increment: Points awarded per food

    Returns:
        The next GameState
    """
    if state.status is not Status.RUNNING:
        return state

    direction = state.pending_direction
    dx, dy = direction.delta
    head_x, head_y = state.head
    new_head = (head_x + dx, head_y + dy)

    if _hits_wall(state, new_head) or _hits_body(state, new_head):
        return end_game(state.evolve(direction=direction))

    snake = (new_head,) + state.snake
    if new_head == state.food:
        score = state.score + score_increment
        food = placer.place(snake)
        logger.debug("Ate food at %s, score=%d", new_head, score)
        return state.evolve(snake=snake, food=food, direction=direction, score=score)

    return state.evolve(snake=snake[:-1], direction=direction)

import logging
import random
from typing import Iterable, Optional

from .state import Position

logger = logging.getLogger(__name__)


class FoodPlacer:
    """Places food on a random cell not occupied by the snake."""

    def __init__(
        self,
        grid_size: int = 20,
        max_attempts: int = 100,
        dense_ratio: float = 0.5,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the placer.

        Args:
            grid_size: Board width and height in cells
            max_attempts: Random draws before falling back to the free-cell set
            dense_ratio: Occupancy above which the free-cell set is used directly
            rng: Random source; pass a seeded instance for reproducible games
        """
        self.grid_size = grid_size
        self.max_attempts = max_attempts
        self.dense_ratio = dense_ratio
        self.rng = rng or random.Random()

    def place(self, snake: Iterable[Position]) -> Optional[Position]:
        """Pick a free cell for the next food.

        Returns:
            A position not on the snake, or None when the board is full
        """
        occupied = set(snake)
        capacity = self.grid_size * self.grid_size

        if len(occupied) < capacity * self.dense_ratio:
            for _ in range(self.max_attempts):
                cell = (self.rng.randrange(self.grid_size), self.rng.randrange(self.grid_size))
                if cell not in occupied:
                    logger.debug("Placed food at %s", cell)
                    return cell
            logger.warning(
                "No free cell after %d draws, sampling from free cells", self.max_attempts
            )

        free_cells = [
            (x, y)
            for x in range(self.grid_size)
            for y in range(self.grid_size)
            if (x, y) not in occupied
        ]
        if not free_cells:
            logger.warning("Board is full, no cell left for food")
            return None

        cell = self.rng.choice(free_cells)
        logger.debug("Placed food at %s (%d free cells)", cell, len(free_cells))
        return cell

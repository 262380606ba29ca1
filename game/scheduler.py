import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickScheduler:
    """Fires a callback at a fixed period on the running event loop.

    At most one timer task exists at a time: start() disarms the previous
    one before arming a new one, stop() is idempotent.
    """

    def __init__(self, callback: Callable[[], None], period: float = 0.15):
        self.callback = callback
        self.period = period
        self._task: Optional[asyncio.Task] = None

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Arm the timer. Must be called from within a running event loop."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Tick scheduler armed (period=%.3fs)", self.period)

    def stop(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.debug("Tick scheduler disarmed")
        self._task = None

    async def aclose(self) -> None:
        """Stop and wait for the timer task to finish cancelling."""
        task = self._task
        self.stop()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            try:
                self.callback()
            except Exception:
                logger.exception("Tick callback %r failed", self.callback)

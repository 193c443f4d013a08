"""Periodic full-application reload, independent of every other component."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_RELOAD_INTERVAL = 60.0  # seconds


class ReloadTimer:
    """Calls ``reload`` every ``interval`` seconds until stopped.

    The callback runs regardless of in-flight searches or fetches. A
    failing reload is logged and the timer keeps its schedule.
    """

    def __init__(
        self,
        reload: Callable[[], Awaitable[None]],
        interval: float = DEFAULT_RELOAD_INTERVAL,
    ):
        self._reload = reload
        self.interval = interval
        self.reload_count = 0
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="weathernow-reload-timer")
        logger.debug("Reload timer started, interval=%.3fs", self.interval)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.reload_count += 1
            logger.info("Reloading application (#%d)", self.reload_count)
            try:
                await self._reload()
            except Exception:
                logger.exception("Application reload #%d failed", self.reload_count)

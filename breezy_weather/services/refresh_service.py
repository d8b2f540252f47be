"""Periodic background refresh of the focused city."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

from breezy_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class PeriodicRefresher:
    """Runs ``refresh`` every ``interval_seconds`` on a background task.

    Ticks never overlap: the next sleep starts only after the previous
    refresh has finished. A failing tick is logged and the loop keeps going.
    """

    def __init__(self, refresh: Callable[[], Awaitable[Any]], interval_seconds: float = 60.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._refresh = refresh
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self.tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the loop on the running event loop (no-op if already running)."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="weather-refresh")
        log_with_context(
            logger,
            "info",
            "Periodic refresh started",
            interval_seconds=self._interval,
            event_type="refresh_loop_started",
        )

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish.

        An in-flight refresh is cancelled with it.
        """
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        log_with_context(logger, "info", "Periodic refresh stopped", event_type="refresh_loop_stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._refresh()
            except Exception as e:
                log_with_context(
                    logger,
                    "error",
                    "Periodic refresh tick failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    event_type="refresh_tick_failed",
                )
            self.tick_count += 1

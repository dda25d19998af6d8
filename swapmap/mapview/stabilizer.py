"""Repeated size recalculation for freshly attached map widgets."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class SizeStabilizer:
    """Call ``widget.invalidate_size()`` on a doubling delay schedule.

    Containers are often inserted with a transient size, so the widget is asked
    to recompute its layout after ``delay`` seconds and then again with the
    delay doubled, ``max_retries`` more times. The schedule stops as soon as
    ``is_current()`` reports that the owning handle was destroyed or replaced.
    """

    def __init__(
        self,
        widget,
        is_current: Callable[[], bool],
        *,
        delay: float,
        max_retries: int,
        sleep: Sleep = asyncio.sleep,
    ):
        self.widget = widget
        self.is_current = is_current
        self.delay = delay
        self.max_retries = max_retries
        self.sleep = sleep
        self.attempts = 0
        self._task: Optional[asyncio.Task] = None

    def start(self) -> "SizeStabilizer":
        self._task = asyncio.ensure_future(self._run())
        return self

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> None:
        """Wait for the schedule to finish or be cancelled."""

        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> None:
        delay = self.delay
        for attempt in range(1, self.max_retries + 2):
            await self.sleep(delay)
            if not self.is_current():
                logger.debug("Map replaced before size attempt %d; stopping", attempt)
                return
            self.attempts = attempt
            try:
                self.widget.invalidate_size()
            except Exception as exc:
                logger.warning("Error invalidating map size (attempt %d): %s", attempt, exc)
            delay *= 2

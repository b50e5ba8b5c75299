"""Last-write-wins debouncing on top of a ``TimerPort``."""

from __future__ import annotations

import logging
from typing import Any, Callable

from tipsplit.ports import TimerPort

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesces bursts of calls so only the newest one runs.

    Each ``call`` cancels the pending callback (if any) and schedules the new
    one ``delay_ms`` later. Superseded callbacks are dropped, never run.
    """

    def __init__(self, timer: TimerPort, delay_ms: int, name: str = "") -> None:
        self.timer = timer
        self.delay_ms = delay_ms
        self.name = name
        self._handle: Any = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback``, replacing whatever was pending."""
        self.cancel()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self.timer.schedule(self.delay_ms, fire)
        logger.debug("Debounce %s: scheduled in %dms", self.name, self.delay_ms)

    def cancel(self) -> None:
        """Drop the pending callback without running it."""
        if self._handle is not None:
            self.timer.cancel(self._handle)
            self._handle = None
            logger.debug("Debounce %s: pending evaluation dropped", self.name)

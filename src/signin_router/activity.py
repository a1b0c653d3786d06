"""In-flight activity tracking for one screen.

The counter drives the busy indicator and gates resubmission: while it is
above zero the screen refuses another submit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

ActivityListener = Callable[[int], None]


class ActivityCounter:
    """Counts async operations that have started but not completed."""

    def __init__(self) -> None:
        self._count = 0
        self._listeners: list[ActivityListener] = []

    @property
    def count(self) -> int:
        return self._count

    @property
    def busy(self) -> bool:
        return self._count > 0

    def add_listener(self, listener: ActivityListener) -> None:
        """Register a callback receiving the new count on every change."""
        self._listeners.append(listener)

    def increment(self) -> None:
        self._count += 1
        self._notify()

    def decrement(self) -> None:
        if self._count == 0:
            raise RuntimeError("ActivityCounter decremented below zero")
        self._count -= 1
        self._notify()

    @contextmanager
    def track(self) -> Iterator[None]:
        """Hold one unit of activity for the duration of the block."""
        self.increment()
        try:
            yield
        finally:
            self.decrement()

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener(self._count)
            except Exception:
                logger.exception("Activity listener failed")

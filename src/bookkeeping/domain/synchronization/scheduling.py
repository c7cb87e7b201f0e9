"""Single-flight guard and periodic trigger for synchronization runs."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


class SingleFlight:
    """Run at most one call at a time; concurrent triggers are skipped, not queued."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    def run[T](self, func: Callable[[], T]) -> T | None:
        """Call ``func`` unless a previous call is still running.

        Returns ``None`` when the trigger was skipped.
        """

        if not self._lock.acquire(blocking=False):
            log.warning("%s already in progress, skipping trigger", self.name)
            return None
        try:
            return func()
        finally:
            self._lock.release()


class PeriodicSynchronization:
    """Call ``trigger`` now and then every ``interval_seconds`` until stopped.

    The stop event doubles as the cancel event of the running synchronization,
    so ``stop()`` lets the in-flight data pass finish and abandons the rest.
    """

    def __init__(
        self,
        trigger: Callable[[], object],
        *,
        interval_seconds: float,
        stop_event: threading.Event | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Synchronization interval must be positive")
        self._trigger = trigger
        self.interval_seconds = interval_seconds
        self.stop_event = stop_event or threading.Event()
        self.runs = 0

    def run_forever(self) -> None:
        log.info("Scheduling synchronization every %s seconds", self.interval_seconds)
        while not self.stop_event.is_set():
            self.tick()
            if self.stop_event.wait(self.interval_seconds):
                break
        log.info("Scheduled synchronization stopped after %s runs", self.runs)

    def tick(self) -> None:
        """Trigger one run; failures are logged and retried at the next tick."""

        self.runs += 1
        try:
            self._trigger()
        except Exception:
            log.exception("Scheduled synchronization failed")

    def stop(self) -> None:
        self.stop_event.set()

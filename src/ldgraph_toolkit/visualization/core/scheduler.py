"""
Periodic tick scheduling for iterative layouts.

The ticker owns a background thread that calls ``tick()`` on a fixed interval.
A tick that is still running when the next one is due causes that next tick
to be skipped, never queued.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

from ...shared.exceptions import SimulationError


class Tickable(Protocol):
    def tick(self) -> Any: ...


class SimulationTicker:
    """Drives a tickable object on a timer with start/stop/tick-once controls."""

    def __init__(
        self,
        target: Tickable,
        interval: float = 1 / 60,
        on_tick: Callable[[Any], None] | None = None,
    ):
        """Initialize the ticker.

        Args:
            target: Object whose ``tick()`` advances one step
            interval: Seconds between ticks
            on_tick: Callback receiving each tick's result (published positions)
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.logger = logging.getLogger(__name__)
        self.target = target
        self.interval = interval
        self.on_tick = on_tick

        self._in_flight = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks_run = 0
        self.ticks_skipped = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick_once(self) -> bool:
        """Run a single tick unless one is already in flight.

        Returns:
            True if the tick ran, False if it was skipped
        """
        if not self._in_flight.acquire(blocking=False):
            self.ticks_skipped += 1
            return False
        try:
            result = self.target.tick()
            self.ticks_run += 1
            if self.on_tick is not None:
                self.on_tick(result)
        finally:
            self._in_flight.release()
        return True

    def start(self) -> None:
        if self.running:
            raise SimulationError("Ticker is already running")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="ldgraph-ticker", daemon=True)
        self._thread.start()
        self.logger.debug(f"Started ticker at {1 / self.interval:.0f} Hz")

    def stop(self, timeout: float | None = 1.0) -> None:
        """Stop the timer and wait for the current tick to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self.logger.debug(f"Stopped ticker after {self.ticks_run} ticks")

    def _loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.tick_once()

    def __enter__(self) -> "SimulationTicker":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

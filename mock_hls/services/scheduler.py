"""Periodic timer driving playlist updates."""
from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

LOGGER = logging.getLogger("mock_hls")


class SchedulerState(str, Enum):
    SUSPENDED = "suspended"
    RUNNING = "running"
    CANCELLED = "cancelled"


class PlaylistScheduler:
    """Fires ``callback`` every ``interval`` seconds on a worker thread.

    States: ``SUSPENDED`` (initial) and ``RUNNING`` toggle through
    :meth:`resume` and :meth:`suspend`; ``CANCELLED`` is terminal. State reads
    never wait on a tick. The callback runs under a separate tick lock that
    :meth:`suspend` passes through, so once it returns no further tick can
    publish until the next :meth:`resume`.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], object],
        name: str = "playlist-timer",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = float(interval)
        self._callback: Optional[Callable[[], object]] = callback
        self._condition = threading.Condition()
        self._tick_lock = threading.RLock()
        self._state = SchedulerState.SUSPENDED
        self._deadline = 0.0
        self._fire_count = 0
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread_started = False

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    @property
    def is_suspended(self) -> bool:
        return self._state is SchedulerState.SUSPENDED

    @property
    def fire_count(self) -> int:
        return self._fire_count

    def resume(self) -> bool:
        """Start firing, first tick immediately. Returns False if already running."""
        with self._condition:
            if self._state is SchedulerState.CANCELLED:
                raise RuntimeError("scheduler has been cancelled")
            if self._state is SchedulerState.RUNNING:
                return False
            LOGGER.info("▶️ playlist timer update started (every %.3fs)", self.interval)
            self._state = SchedulerState.RUNNING
            self._deadline = time.monotonic()
            if not self._thread_started:
                self._thread.start()
                self._thread_started = True
            self._condition.notify_all()
            return True

    def suspend(self) -> bool:
        """Pause firing without tearing the timer down. Returns False if not running.

        Waits for an in-flight tick, so nothing is published after it returns.
        """
        with self._condition:
            if self._state is not SchedulerState.RUNNING:
                return False
            LOGGER.info("⏸️ playlist timer update stopped")
            self._state = SchedulerState.SUSPENDED
            self._condition.notify_all()
        with self._tick_lock:
            pass
        return True

    def cancel(self, timeout: Optional[float] = 5.0) -> None:
        with self._condition:
            if self._state is SchedulerState.CANCELLED:
                return
            # A suspended worker is parked in wait(); detaching the callback
            # and waking it lets it exit on its own.
            self._callback = None
            self._state = SchedulerState.CANCELLED
            self._condition.notify_all()
        if self._thread_started and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        LOGGER.info("⏹️ playlist timer cancelled")

    def _run(self) -> None:
        while True:
            with self._condition:
                if self._state is SchedulerState.CANCELLED:
                    return
                if self._state is SchedulerState.SUSPENDED:
                    self._condition.wait()
                    continue
                delay = self._deadline - time.monotonic()
                if delay > 0:
                    self._condition.wait(delay)
                    continue
                self._advance_deadline()
            self._fire()

    def _advance_deadline(self) -> None:
        now = time.monotonic()
        self._deadline += self.interval
        if self._deadline <= now:
            # Overran a whole period; re-anchor instead of bursting.
            self._deadline = now + self.interval

    def _fire(self) -> None:
        with self._tick_lock:
            # suspend() or cancel() may have won the race for the tick lock.
            if self._state is not SchedulerState.RUNNING:
                return
            callback = self._callback
            if callback is None:
                return
            self._fire_count += 1
            try:
                callback()
            except Exception:  # noqa: BLE001
                LOGGER.exception("❌ playlist update failed")

"""Housing Forecast — Poller.

Dedicated background thread that runs a poll cycle every ``interval``
seconds until stopped:

  Stopped --start()--> Running --stop()--> Stopping --thread exits--> Stopped

Cycles never overlap: the loop is strictly wait → cycle → wait. A cycle in
flight when stop() is called runs to completion. Any exception a cycle raises
is logged and the loop carries on at the next interval.
"""

import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel

from forecast.core.logging import get_logger

logger = get_logger("scheduler.poller")


class InvalidStateError(Exception):
    """Raised on lifecycle misuse (double start, stop when not running)."""


class PollerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    STOPPING = "stopping"


class PollerStatus(BaseModel):
    state: PollerState
    interval_seconds: float
    cycles_completed: int = 0
    cycles_failed: int = 0
    last_cycle_started: Optional[datetime] = None
    last_cycle_finished: Optional[datetime] = None
    last_error: Optional[str] = None


class Poller:
    """Owns the poll thread and its cancellation signal."""

    def __init__(self, cycle: Callable[[], Any], interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.cycle = cycle
        self.interval = interval
        self._lock = threading.Lock()
        self._state = PollerState.STOPPED
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._status = PollerStatus(state=self._state, interval_seconds=interval)

    @property
    def state(self) -> PollerState:
        with self._lock:
            return self._state

    def status(self) -> PollerStatus:
        with self._lock:
            return self._status.model_copy(update={"state": self._state})

    def start(self) -> None:
        with self._lock:
            if self._state is not PollerState.STOPPED:
                raise InvalidStateError(f"Cannot start poller while {self._state.value}")
            self._cancel = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._cancel,),
                name="forecast-poller",
                daemon=True,
            )
            self._state = PollerState.RUNNING
            self._thread.start()
        logger.info(f"Poller started. Interval: {self.interval}s")

    def stop(self) -> None:
        """Request cancellation and block until the poll thread has exited."""
        with self._lock:
            if self._state is not PollerState.RUNNING:
                raise InvalidStateError(f"Cannot stop poller while {self._state.value}")
            self._state = PollerState.STOPPING
            thread = self._thread
            self._cancel.set()

        if thread is not None:
            thread.join()

        with self._lock:
            self._thread = None
            self._state = PollerState.STOPPED
        logger.info("Poller stopped")

    def _run(self, cancel: threading.Event) -> None:
        while not cancel.wait(self.interval):
            self._run_cycle()
        logger.info("Poll loop observed cancellation")

    def _run_cycle(self) -> None:
        with self._lock:
            self._status.last_cycle_started = datetime.now(timezone.utc)
        try:
            self.cycle()
        except Exception as e:
            logger.exception(f"Poll cycle failed: {e}")
            with self._lock:
                self._status.cycles_failed += 1
                self._status.last_error = f"{type(e).__name__}: {e}"
            return
        with self._lock:
            self._status.cycles_completed += 1
            self._status.last_cycle_finished = datetime.now(timezone.utc)

"""Shared lifecycle for the long-running payment workers."""

from __future__ import annotations

import logging
import random
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from mt103_sim.brokers.base import Broker
from mt103_sim.config import WorkerConfig
from mt103_sim.exceptions import MT103SimError
from mt103_sim.models.bank import Bank

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"


@dataclass
class WorkerStats:
    """Per-worker counters. Written only by the worker thread."""

    sent: int = 0
    received: int = 0
    credited: int = 0
    failed: int = 0
    amount_sent: int = 0
    amount_credited: int = 0
    amount_lost: int = 0


class Worker(ABC):
    """Base class for the sender and receiver loops.

    The supervisor calls :meth:`signal_stop` and :meth:`is_active` from its
    own thread. The stop request is a :class:`threading.Event` and the state
    is read and written under a lock, so both sides always see the latest
    value. The loop checks for a stop between iterations only.

    Parameters
    ----------
    broker : Broker
        Connection owned by this worker alone.
    bank : Bank
        Bank the worker operates on.
    config : WorkerConfig | None
        Timing and failure-threshold settings.
    rng : random.Random | None
        Worker-local random generator.
    """

    kind = "worker"

    def __init__(
        self,
        broker: Broker,
        bank: Bank,
        config: WorkerConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if broker is None or bank is None:
            raise ValueError("Invalid parameters: broker and bank are required")
        self.broker = broker
        self.bank = bank
        self.config = config or WorkerConfig()
        self.rng = rng or random.Random()
        self.stats = WorkerStats()
        self._failures = 0
        self._state = WorkerState.IDLE
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._stopped = threading.Event()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bank.swift_name}, state={self.state.value})"

    @property
    def name(self) -> str:
        return f"{self.kind}-{self.bank.swift_name}"

    @property
    def state(self) -> WorkerState:
        with self._state_lock:
            return self._state

    def _set_state(self, state: WorkerState) -> None:
        with self._state_lock:
            self._state = state

    @property
    def failures(self) -> int:
        return self._failures

    def signal_stop(self) -> None:
        """Ask the loop to exit after its current iteration. Idempotent."""
        with self._state_lock:
            if self._state == WorkerState.RUNNING:
                self._state = WorkerState.STOPPING
        self._stop.set()

    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def is_active(self) -> bool:
        return self.state in (WorkerState.RUNNING, WorkerState.STOPPING)

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Block until the loop has exited; True if it did within ``timeout``."""
        return self._stopped.wait(timeout)

    def sleep(self, seconds: float) -> bool:
        """Sleep, waking early on a stop request. Returns True if stopped."""
        return self._stop.wait(seconds)

    def _delay(self) -> float:
        return self.rng.uniform(self.config.rate_min, self.config.rate_max)

    def _record_failure(self) -> None:
        self._failures += 1
        self.stats.failed += 1
        if self._failures > self.config.max_failures:
            logger.error("%s failed too many times (%d). Quitting", self.name, self._failures)
            self.signal_stop()

    def _prepare(self) -> bool:
        """Checks run before the loop starts; False aborts the run."""
        return True

    @abstractmethod
    def step(self) -> None:
        """One loop iteration. Errors propagate to :meth:`run_once`."""

    def run_once(self) -> None:
        """Run one iteration, logging and counting any error it raises."""
        try:
            self.step()
        except MT103SimError as e:
            logger.error("%s: %s", self.name, e)
            self._record_failure()
        except Exception:
            logger.exception("%s: unexpected error", self.name)
            self._record_failure()

    def run(self) -> None:
        """Thread body: loop until stopped or failing too often."""
        if not self._prepare():
            self._finish()
            return
        try:
            self.broker.open()
        except MT103SimError as e:
            logger.error("%s could not open its broker connection: %s", self.name, e)
            self._finish()
            return

        with self._state_lock:
            if self._state == WorkerState.IDLE:
                self._state = WorkerState.RUNNING
        logger.info("%s now active.", self.name)
        try:
            while not self._stop.is_set():
                self.run_once()
        finally:
            try:
                self.broker.close()
            except MT103SimError as e:
                logger.warning("%s: error closing broker connection: %s", self.name, e)
            self._finish()

    def _finish(self) -> None:
        self._set_state(WorkerState.STOPPED)
        self._stopped.set()
        logger.info("%s now stopped.", self.name)

"""In-process broker for tests and offline runs."""

from __future__ import annotations

import logging
import queue
import threading

from mt103_sim.brokers.base import Broker
from mt103_sim.exceptions import BrokerError

logger = logging.getLogger(__name__)


class MemoryExchange:
    """Named FIFO queues shared by every connection in the process."""

    def __init__(self) -> None:
        self._queues: dict[str, queue.Queue[str]] = {}
        self._lock = threading.Lock()

    def queue(self, name: str) -> "queue.Queue[str]":
        with self._lock:
            if name not in self._queues:
                self._queues[name] = queue.Queue()
            return self._queues[name]

    def pending(self) -> dict[str, int]:
        """Approximate number of undelivered messages per queue."""
        with self._lock:
            return {name: q.qsize() for name, q in self._queues.items()}

    def drain(self, name: str) -> list[str]:
        """Remove and return every message currently waiting on ``name``."""
        q = self.queue(name)
        drained = []
        while True:
            try:
                drained.append(q.get_nowait())
            except queue.Empty:
                return drained


class InMemoryBroker(Broker):
    """One connection to a :class:`MemoryExchange`."""

    def __init__(self, exchange: MemoryExchange) -> None:
        self.exchange = exchange
        self._open = False

    def open(self) -> None:
        self._open = True

    def send(self, queue_name: str, payload: str) -> None:
        if not self._open:
            raise BrokerError(f"Cannot send to {queue_name}: connection is closed")
        self.exchange.queue(queue_name).put(payload)
        logger.debug("Queued message on %s", queue_name)

    def receive(self, queue_name: str, timeout: float) -> str | None:
        if not self._open:
            raise BrokerError(f"Cannot receive from {queue_name}: connection is closed")
        try:
            return self.exchange.queue(queue_name).get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._open = False

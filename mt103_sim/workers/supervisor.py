"""Supervisor: start the workers, stop them, report the banks."""

from __future__ import annotations

import logging
import sys
import threading
import time
from typing import TextIO

from mt103_sim.models.bank import Bank
from mt103_sim.workers.base import Worker
from mt103_sim.workers.sender import MoneySender

logger = logging.getLogger(__name__)


class Supervisor:
    """Run each worker on its own thread and shut them down gracefully."""

    def __init__(self) -> None:
        self.workers: list[Worker] = []
        self._threads: list[threading.Thread] = []

    def add(self, worker: Worker) -> None:
        if self._threads:
            raise RuntimeError("Workers must be added before start()")
        self.workers.append(worker)

    @property
    def banks(self) -> list[Bank]:
        """Distinct banks touched by the workers, sender peers included."""
        seen: dict[int, Bank] = {}
        for worker in self.workers:
            seen.setdefault(id(worker.bank), worker.bank)
            for peer in getattr(worker, "peers", []):
                seen.setdefault(id(peer), peer)
        return list(seen.values())

    def start(self) -> None:
        """Freeze every bank, then start one thread per worker."""
        for bank in self.banks:
            bank.freeze()

        logger.info("Starting all %d worker threads", len(self.workers))
        for worker in self.workers:
            thread = threading.Thread(target=worker.run, name=worker.name, daemon=True)
            thread.start()
            self._threads.append(thread)

    def signal_stop(self) -> None:
        for worker in self.workers:
            worker.signal_stop()

    def is_active(self) -> bool:
        return any(worker.is_active() for worker in self.workers)

    def stop(self, timeout: float | None = None) -> bool:
        """Signal every worker to stop and wait for their threads.

        Parameters
        ----------
        timeout : float | None
            Overall time to wait; None waits indefinitely.

        Returns
        -------
        bool
            True if every worker is inactive afterwards.
        """
        logger.info("Ending all worker threads")
        self.signal_stop()

        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self._threads:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(remaining)

        if self.is_active():
            still_running = [w.name for w in self.workers if w.is_active()]
            logger.warning("Workers still active after stop: %s", ", ".join(still_running))
            return False
        logger.info("All threads closed.")
        return True

    def wait_for_stop_signal(self, stream: TextIO | None = None) -> None:
        """Block until a line (ENTER) arrives on ``stream`` (stdin by default)."""
        stream = stream or sys.stdin
        logger.info("Press ENTER to stop...")
        stream.readline()

    def in_flight_losses(self) -> int:
        """Money debited by senders whose payment never reached the broker."""
        return sum(w.stats.amount_lost for w in self.workers if isinstance(w, MoneySender))

    def total_balance(self) -> int:
        return sum(bank.total_balance() for bank in self.banks)

    def log_summary(self, title: str) -> None:
        logger.info("=" * 60)
        logger.info(title)
        logger.info("=" * 60)
        for bank in self.banks:
            for line in bank.summary_lines():
                logger.info(line)
        for worker in self.workers:
            stats = worker.stats
            logger.info(
                "%s: sent=%d received=%d credited=%d failed=%d lost=%d",
                worker.name,
                stats.sent,
                stats.received,
                stats.credited,
                stats.failed,
                stats.amount_lost,
            )

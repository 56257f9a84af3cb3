"""Abstract broker adapter used by the workers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType


class Broker(ABC):
    """A client session to a message broker.

    Each worker owns its own session, so implementations need not be
    thread-safe. Failures are reported as :class:`~mt103_sim.exceptions.BrokerError`.
    """

    @abstractmethod
    def open(self) -> None:
        """Establish the session."""

    @abstractmethod
    def send(self, queue_name: str, payload: str) -> None:
        """Publish one message to ``queue_name``."""

    @abstractmethod
    def receive(self, queue_name: str, timeout: float) -> str | None:
        """Block up to ``timeout`` seconds; return None if nothing arrived."""

    @abstractmethod
    def close(self) -> None:
        """Release the session."""

    def __enter__(self) -> "Broker":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

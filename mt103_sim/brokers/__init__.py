"""Broker adapters connecting the workers to a message broker."""

from mt103_sim.brokers.base import Broker
from mt103_sim.brokers.kafka import KafkaBroker
from mt103_sim.brokers.memory import InMemoryBroker, MemoryExchange
from mt103_sim.config import BrokerConfig
from mt103_sim.exceptions import ConfigurationError


def create_broker(config: BrokerConfig, exchange: MemoryExchange | None = None) -> Broker:
    """Build a new, unopened broker connection for one worker.

    Parameters
    ----------
    config : BrokerConfig
        Selects the adapter.
    exchange : MemoryExchange | None
        Shared exchange, required when ``config.kind == "memory"``.
    """
    if config.kind == "kafka":
        return KafkaBroker(config.kafka)
    if config.kind == "memory":
        if exchange is None:
            raise ConfigurationError("The memory broker needs a shared MemoryExchange")
        return InMemoryBroker(exchange)
    raise ConfigurationError(f"Unknown broker kind {config.kind!r}")


__all__ = ["Broker", "InMemoryBroker", "KafkaBroker", "MemoryExchange", "create_broker"]

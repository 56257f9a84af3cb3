"""Kafka broker adapter: one topic per bank queue."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import Consumer, KafkaError, KafkaException, Producer

from mt103_sim.brokers.base import Broker
from mt103_sim.config import KafkaConfig
from mt103_sim.exceptions import BrokerError, DecodeError

logger = logging.getLogger(__name__)


@dataclass
class BrokerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    received: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate delivery success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaBroker(Broker):
    """Send and receive MT103 payloads through Kafka topics.

    Sends are flushed synchronously so that a failed delivery surfaces as a
    :class:`BrokerError` to the sender that debited the money. Consumers are
    created lazily, one per queue, in the consumer group
    ``<group_prefix>.<queue>``.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize the adapter.

        Parameters
        ----------
        config : KafkaConfig | str
            Client configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.stats = BrokerStats()
        self.producer: Producer | None = None
        self._consumers: dict[str, Consumer] = {}
        self._delivery_error: Any = None

    def open(self) -> None:
        """Create the Kafka producer."""
        if self.producer is None:
            try:
                self.producer = Producer(self.config.producer_dict())
            except KafkaException as e:
                raise BrokerError(f"Failed to create Kafka producer: {e}") from e
            logger.debug("Kafka producer created for %s", self.config.bootstrap_servers)

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            self._delivery_error = err
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, queue_name: str, payload: str) -> None:
        """Produce one message and wait for its delivery report."""
        if self.producer is None:
            raise BrokerError(f"Cannot send to {queue_name}: broker is not open")

        self._delivery_error = None
        try:
            self.producer.produce(
                topic=queue_name,
                value=payload.encode("utf-8"),
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            self.stats.failed += 1
            raise BrokerError(f"Failed to produce to {queue_name}: {e}") from e
        self.stats.sent += 1

        remaining = self.producer.flush(self.config.send_timeout)
        if remaining > 0:
            # The sender books this payment as lost, so it must never be delivered later.
            self.producer.purge()
            self.producer.poll(0)
            raise BrokerError(
                f"{remaining} message(s) to {queue_name} not delivered within "
                f"{self.config.send_timeout}s"
            )
        if self._delivery_error is not None:
            raise BrokerError(f"Delivery to {queue_name} failed: {self._delivery_error}")

    def _consumer_for(self, queue_name: str) -> Consumer:
        consumer = self._consumers.get(queue_name)
        if consumer is None:
            group_id = f"{self.config.group_prefix}.{queue_name}"
            try:
                consumer = Consumer(self.config.consumer_dict(group_id))
                consumer.subscribe([queue_name])
            except KafkaException as e:
                raise BrokerError(f"Failed to subscribe to {queue_name}: {e}") from e
            self._consumers[queue_name] = consumer
            logger.debug("Kafka consumer subscribed to %s as %s", queue_name, group_id)
        return consumer

    def receive(self, queue_name: str, timeout: float) -> str | None:
        """Poll ``queue_name`` for up to ``timeout`` seconds."""
        consumer = self._consumer_for(queue_name)
        try:
            msg = consumer.poll(timeout)
        except KafkaException as e:
            raise BrokerError(f"Failed to poll {queue_name}: {e}") from e

        if msg is None:
            return None
        err = msg.error()
        if err is not None:
            if err.code() == KafkaError._PARTITION_EOF:
                return None
            raise BrokerError(f"Consumer error on {queue_name}: {err}")

        self.stats.received += 1
        value = msg.value()
        if value is None:
            return None
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Message on {queue_name} is not UTF-8") from e

    def close(self) -> None:
        """Flush the producer and close every consumer."""
        if self.producer is not None:
            self.producer.flush(self.config.send_timeout)
            self.producer = None
        for queue_name, consumer in self._consumers.items():
            try:
                consumer.close()
            except KafkaException as e:
                logger.warning("Error closing consumer for %s: %s", queue_name, e)
        self._consumers.clear()
        logger.info(
            "Kafka broker closed: sent=%d, delivered=%d, failed=%d, received=%d, success=%.1f%%",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            self.stats.received,
            self.stats.success_rate * 100,
        )

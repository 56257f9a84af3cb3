"""Configuration management for mt103-sim."""

from dataclasses import dataclass, field
from typing import Any

from mt103_sim.exceptions import ConfigurationError
from mt103_sim.models.currency import Currency

BROKER_KINDS = ("kafka", "memory")


@dataclass
class KafkaConfig:
    """Kafka client configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 0
    retries: int = 3
    group_prefix: str = "mt103-sim"
    send_timeout: float = 10.0

    def producer_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka producer config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }

    def consumer_dict(self, group_id: str) -> dict[str, Any]:
        """Convert to confluent-kafka consumer config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "group.id": group_id,
            "auto.offset.reset": "earliest",
            "enable.partition.eof": False,
        }


@dataclass
class BrokerConfig:
    """Which broker adapter to use and how to reach it."""

    kind: str = "kafka"
    kafka: KafkaConfig = field(default_factory=KafkaConfig)

    def validate(self) -> None:
        """Raise ConfigurationError for an unknown broker kind."""
        if self.kind not in BROKER_KINDS:
            raise ConfigurationError(
                f"Unknown broker kind {self.kind!r}; expected one of {BROKER_KINDS}"
            )


@dataclass
class WorkerConfig:
    """Sender and receiver loop tuning."""

    rate_min: float = 2.0  # seconds
    rate_max: float = 7.0  # seconds
    receive_timeout: float = 5.0  # seconds
    max_failures: int = 4
    strict_checksum: bool = False

    def validate(self) -> None:
        """Raise ConfigurationError if the timings cannot drive a worker."""
        if self.rate_min < 0:
            raise ConfigurationError("rate_min must not be negative")
        if self.rate_max <= self.rate_min:
            raise ConfigurationError("rate_max must be greater than rate_min")
        if self.receive_timeout <= 0:
            raise ConfigurationError("receive_timeout must be positive")
        if self.max_failures < 0:
            raise ConfigurationError("max_failures must not be negative")


@dataclass
class BankConfig:
    """Static description of one simulated bank."""

    name: str
    swift_name: str
    queue_name: str
    currency: Currency = Currency.GBP
    holders: list[str] = field(default_factory=list)


def default_banks() -> list[BankConfig]:
    """The three banks the simulator wires up when nothing else is configured."""
    return [
        BankConfig(
            name="BankOfRob",
            swift_name="BANKROBE",
            queue_name="BANKROB.Q",
            holders=["Rob Parker", "Jimbo Blooms", "Dwayne Johnson", "Richard Liesen"],
        ),
        BankConfig(
            name="BankOfGraham",
            swift_name="BANKGRAH",
            queue_name="BANKGRA.Q",
            holders=["Harry Houdini", "Margret Allens", "Alice Baker", "Sherlock Holmes"],
        ),
        BankConfig(
            name="BankOfNick",
            swift_name="BANKNICK",
            queue_name="BANKNICK.Q",
            holders=["David Ware", "Amanda Maidstone", "Paul Norfolk", "Charlie Chesire"],
        ),
    ]


@dataclass
class SimulationConfig:
    """Main configuration for mt103-sim."""

    broker: BrokerConfig = field(default_factory=BrokerConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    banks: list[BankConfig] = field(default_factory=default_banks)
    accounts_per_bank: int = 0  # 0 keeps the configured holders
    starting_balance: int = 1000
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Validate every nested section."""
        self.broker.validate()
        self.worker.validate()
        if self.accounts_per_bank < 0:
            raise ConfigurationError("accounts_per_bank must not be negative")
        if len(self.banks) < 2:
            raise ConfigurationError("At least two banks are needed to exchange payments")

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Create config from environment variables.

        Raises
        ------
        ConfigurationError
            If a numeric variable cannot be parsed.
        """
        import os

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            group_prefix=os.getenv("KAFKA_GROUP_PREFIX", "mt103-sim"),
        )

        broker = BrokerConfig(
            kind=os.getenv("BROKER_KIND", "kafka"),
            kafka=kafka,
        )

        try:
            worker = WorkerConfig(
                rate_min=float(os.getenv("RATE_MIN", "2")),
                rate_max=float(os.getenv("RATE_MAX", "7")),
                receive_timeout=float(os.getenv("RECEIVE_TIMEOUT", "5")),
                max_failures=int(os.getenv("MAX_FAILURES", "4")),
                strict_checksum=os.getenv("STRICT_CHECKSUM", "false").lower() == "true",
            )
            accounts_per_bank = int(os.getenv("ACCOUNTS_PER_BANK", "0"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric environment variable: {e}") from e

        return cls(
            broker=broker,
            worker=worker,
            accounts_per_bank=accounts_per_bank,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )

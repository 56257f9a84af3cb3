"""Command-line entry point: wire up banks and workers, run until ENTER.

Creates every configured bank, one receiver and one sender per bank (each
with its own broker connection), registers every other bank as a sender
peer, then runs until ENTER is pressed (or ``--duration`` elapses) and
prints the final balances.
"""

from __future__ import annotations

import argparse
import logging
import random
import time

from mt103_sim.brokers import Broker, MemoryExchange, create_broker
from mt103_sim.config import SimulationConfig
from mt103_sim.exceptions import ConfigurationError, MT103SimError
from mt103_sim.generators import HolderGenerator
from mt103_sim.logging import setup_logging
from mt103_sim.models.bank import Bank
from mt103_sim.workers import MoneyReceiver, MoneySender, Supervisor

logger = logging.getLogger(__name__)


def _rng(seed: int | None, offset: int) -> random.Random:
    return random.Random(None if seed is None else seed + offset)


def build_banks(config: SimulationConfig) -> list[Bank]:
    """Create and populate every configured bank."""
    holders = HolderGenerator(seed=config.seed) if config.accounts_per_bank else None
    banks = []
    for i, bank_config in enumerate(config.banks):
        bank = Bank(
            bank_config.name,
            bank_config.swift_name,
            bank_config.currency,
            bank_config.queue_name,
            rng=_rng(config.seed, i),
        )
        if holders is not None:
            holders.populate(bank, config.accounts_per_bank, config.starting_balance)
        else:
            for holder in bank_config.holders:
                bank.open_account(holder, config.starting_balance)
        if not bank.accounts:
            raise MT103SimError(f"Bank {bank.name} has no accounts")
        banks.append(bank)
    return banks


def build_supervisor(
    config: SimulationConfig,
    banks: list[Bank],
    exchange: MemoryExchange | None = None,
) -> Supervisor:
    """Create one receiver and one sender per bank, each on its own connection.

    Every connection is opened here so a bad broker address fails setup. If
    one cannot be created or opened, the ones already opened are closed.
    """
    opened: list[Broker] = []

    def connect() -> Broker:
        broker = create_broker(config.broker, exchange)
        broker.open()
        opened.append(broker)
        return broker

    supervisor = Supervisor()
    offset = len(banks)
    try:
        for i, bank in enumerate(banks):
            supervisor.add(MoneyReceiver(connect(), bank, config.worker, _rng(config.seed, offset + i)))

        for i, bank in enumerate(banks):
            sender = MoneySender(connect(), bank, config.worker, _rng(config.seed, 2 * offset + i))
            for other in banks:
                if other is not bank:
                    sender.add_peer(other)
            supervisor.add(sender)
    except MT103SimError:
        for broker in opened:
            try:
                broker.close()
            except MT103SimError as e:
                logger.warning("Error closing broker during setup: %s", e)
        raise

    return supervisor


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate banks exchanging SWIFT MT103 payments through a broker",
    )
    parser.add_argument(
        "--broker",
        choices=["kafka", "memory"],
        default=None,
        help="Broker adapter (default: BROKER_KIND or kafka)",
    )
    parser.add_argument("--bootstrap-servers", default=None, help="Kafka bootstrap servers")
    parser.add_argument(
        "--accounts-per-bank",
        type=int,
        default=None,
        help="Generate N holders per bank with Faker (0 keeps the built-in holders)",
    )
    parser.add_argument("--starting-balance", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--rate-min", type=float, default=None, help="Minimum send delay (s)")
    parser.add_argument("--rate-max", type=float, default=None, help="Maximum send delay (s)")
    parser.add_argument("--receive-timeout", type=float, default=None, help="Receive timeout (s)")
    parser.add_argument(
        "--strict-checksum",
        action="store_true",
        help="Reject received messages whose footer checksum does not match",
    )
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--log-format", choices=["standard", "json"], default=None)
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Run for N seconds instead of waiting for ENTER",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Environment defaults overridden by command-line options."""
    config = SimulationConfig.from_env()
    if args.broker is not None:
        config.broker.kind = args.broker
    if args.bootstrap_servers is not None:
        config.broker.kafka.bootstrap_servers = args.bootstrap_servers
    if args.accounts_per_bank is not None:
        config.accounts_per_bank = args.accounts_per_bank
    if args.starting_balance is not None:
        config.starting_balance = args.starting_balance
    if args.seed is not None:
        config.seed = args.seed
    if args.rate_min is not None:
        config.worker.rate_min = args.rate_min
    if args.rate_max is not None:
        config.worker.rate_max = args.rate_max
    if args.receive_timeout is not None:
        config.worker.receive_timeout = args.receive_timeout
    if args.strict_checksum:
        config.worker.strict_checksum = True
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config


def main(argv: list[str] | None = None) -> int:
    """Run the simulation. Returns the process exit status."""
    args = parse_args(argv)
    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        setup_logging()
        logger.error("Invalid configuration: %s", e)
        return 1
    setup_logging(config.log_level, config.log_format)

    try:
        config.validate()
        exchange = MemoryExchange() if config.broker.kind == "memory" else None
        banks = build_banks(config)
        supervisor = build_supervisor(config, banks, exchange)
    except MT103SimError as e:
        logger.error("Setup failed: %s", e)
        return 1

    supervisor.log_summary("Initial state")
    initial_total = supervisor.total_balance()
    supervisor.start()

    try:
        if args.duration is not None:
            time.sleep(args.duration)
        else:
            supervisor.wait_for_stop_signal()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    stopped = supervisor.stop(timeout=config.worker.receive_timeout + config.worker.rate_max + 5)
    supervisor.log_summary("Final stats")
    logger.info(
        "Money: initial=%d final=%d lost in flight=%d",
        initial_total,
        supervisor.total_balance(),
        supervisor.in_flight_losses(),
    )
    return 0 if stopped else 1

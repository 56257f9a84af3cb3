"""Pytest configuration and fixtures."""

import random

import pytest

from mt103_sim.brokers.memory import InMemoryBroker, MemoryExchange
from mt103_sim.config import WorkerConfig
from mt103_sim.models import Bank, Currency, Payment


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(seed: int) -> random.Random:
    """Seeded random generator."""
    return random.Random(seed)


@pytest.fixture
def fast_config() -> WorkerConfig:
    """Worker timings short enough for tests."""
    return WorkerConfig(rate_min=0.01, rate_max=0.05, receive_timeout=0.1)


@pytest.fixture
def exchange() -> MemoryExchange:
    """Fresh in-process exchange."""
    return MemoryExchange()


@pytest.fixture
def connection(exchange: MemoryExchange) -> InMemoryBroker:
    """Open connection to the test exchange."""
    broker = InMemoryBroker(exchange)
    broker.open()
    return broker


@pytest.fixture
def rob_bank() -> Bank:
    """Sending bank with a single account."""
    bank = Bank("BankOfRob", "BANKROBE", Currency.GBP, "BANKROB.Q", rng=random.Random(1))
    bank.open_account("Rob Parker")
    return bank


@pytest.fixture
def graham_bank() -> Bank:
    """Receiving bank with a single account."""
    bank = Bank("BankOfGraham", "BANKGRAH", Currency.GBP, "BANKGRA.Q", rng=random.Random(2))
    bank.open_account("Harry Houdini")
    return bank


@pytest.fixture
def sample_payment() -> Payment:
    """Rob Parker pays Harry Houdini 250 GBP."""
    return Payment.create(
        send_bank="BANKROBE",
        send_branch="ABC",
        send_account="12345678901234567890",
        send_name="Rob Parker",
        dest_bank="BANKGRAH",
        dest_branch="DEF",
        dest_account="09876543210987654321",
        dest_name="Harry Houdini",
        amount=250,
        currency=Currency.GBP,
        session=7,
        seq=0,
    )

"""Tests for account-holder generation."""

import random

from mt103_sim.generators import HolderGenerator
from mt103_sim.models import Bank, Currency


class TestHolderGenerator:
    """Tests for HolderGenerator."""

    def test_names_are_long_enough(self) -> None:
        names = HolderGenerator(seed=42).names(50)

        assert len(names) == 50
        assert all(len(name) >= 3 for name in names)

    def test_seed_reproducibility(self) -> None:
        assert HolderGenerator(seed=42).names(10) == HolderGenerator(seed=42).names(10)

    def test_different_seeds_differ(self) -> None:
        assert HolderGenerator(seed=1).names(10) != HolderGenerator(seed=2).names(10)

    def test_populate(self) -> None:
        bank = Bank("BankOfRob", "BANKROBE", Currency.GBP, "BANKROB.Q", rng=random.Random(3))

        holders = HolderGenerator(seed=42).populate(bank, 5, starting_balance=500)

        assert len(bank.accounts) == 5
        assert [a.name for a in bank.accounts] == holders
        assert bank.total_balance() == 2500

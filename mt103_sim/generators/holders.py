"""Account-holder generator for populating simulated banks."""

from __future__ import annotations

from faker import Faker

from mt103_sim.models.bank import Bank
from mt103_sim.models.payment import NAME_PREFIX_LENGTH


class HolderGenerator:
    """Generate account-holder names with Faker.

    Names shorter than three characters cannot appear in a transaction
    reference, so they are skipped.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_GB``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_GB") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def name(self) -> str:
        while True:
            name = self.fake.name()
            if len(name) >= NAME_PREFIX_LENGTH:
                return name

    def names(self, count: int) -> list[str]:
        return [self.name() for _ in range(count)]

    def populate(self, bank: Bank, count: int, starting_balance: int = 1000) -> list[str]:
        """Open ``count`` accounts in ``bank`` and return the holder names."""
        holders = self.names(count)
        for holder in holders:
            bank.open_account(holder, starting_balance)
        return holders

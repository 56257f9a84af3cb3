"""Account model: a thread-safe integer balance."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = 1000


@dataclass(frozen=True)
class AccountSnapshot:
    """Consistent view of an account taken under its lock."""

    name: str
    number: str
    balance: int


class Account:
    """Bank account holding a non-negative integer balance.

    Every balance read and update happens under the account's lock, so
    sender and receiver threads can touch the same account safely. There
    are no cross-account transactions.
    """

    def __init__(
        self,
        name: str,
        number: str,
        balance: int = DEFAULT_STARTING_BALANCE,
    ) -> None:
        self._name = name
        self._number = number
        self._balance = max(0, balance)
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Account({self._number}, name={self._name!r}, balance={self.balance})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def number(self) -> str:
        return self._number

    @property
    def balance(self) -> int:
        with self._lock:
            return self._balance

    def snapshot(self) -> AccountSnapshot:
        """Read name, number and balance in one locked step."""
        with self._lock:
            return AccountSnapshot(self._name, self._number, self._balance)

    def credit(self, amount: int) -> None:
        """Add money. Negative amounts are refused without raising."""
        with self._lock:
            if amount < 0:
                logger.warning("Refusing to credit negative amount %d to %s", amount, self._number)
                return
            self._balance += amount

    def debit(self, amount: int) -> bool:
        """Remove money if the balance covers it.

        Returns
        -------
        bool
            True if the balance was reduced by exactly ``amount``; False
            (and no change) for negative amounts or insufficient funds.
        """
        with self._lock:
            if amount < 0:
                logger.warning("Refusing to debit negative amount %d from %s", amount, self._number)
                return False
            if self._balance - amount < 0:
                return False
            self._balance -= amount
            return True

    def debit_random(self, rng: random.Random | None = None) -> int:
        """Remove a random amount in ``[0, balance]`` and return it.

        Zero is a legitimate draw; callers treat it as "nothing to send".
        """
        rng = rng or random
        with self._lock:
            if self._balance == 0:
                return 0
            lost = rng.randint(0, self._balance)
            lost = min(lost, self._balance)
            self._balance -= lost
            return lost

    def describe(self) -> str:
        """One-line printable form used in bank summaries."""
        snap = self.snapshot()
        return f"Name[{snap.name}] Number[{snap.number}] Balance[{snap.balance}]"

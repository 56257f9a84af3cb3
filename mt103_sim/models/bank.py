"""Bank model: identifying codes plus the accounts it owns."""

from __future__ import annotations

import logging
import random

from mt103_sim.exceptions import BadBic, InvalidBankStateError
from mt103_sim.models.account import DEFAULT_STARTING_BALANCE, Account
from mt103_sim.models.currency import Currency

logger = logging.getLogger(__name__)

BIC_LENGTH = 8
ACCOUNT_NUMBER_LENGTH = 20
BRANCH_CODE_LENGTH = 3
BRANCH_CODE_CHARS = "ABCDEFG"


class Bank:
    """A simulated bank.

    Accounts are opened during setup. Once :meth:`freeze` has been called
    the account list becomes an immutable tuple, so worker threads can
    read it without synchronisation.

    Parameters
    ----------
    name : str
        Display name.
    swift_name : str
        8-character BIC written into MT103 headers.
    currency : Currency
        Currency used for outgoing payments.
    queue_name : str
        Broker queue this bank consumes inbound payments from.
    rng : random.Random | None
        Source of randomness for the branch code and account numbers.
    """

    def __init__(
        self,
        name: str,
        swift_name: str,
        currency: Currency,
        queue_name: str,
        rng: random.Random | None = None,
    ) -> None:
        if len(swift_name) != BIC_LENGTH:
            raise BadBic(f"SWIFT name must be {BIC_LENGTH} characters for the BIC, got {swift_name!r}")
        self.name = name
        self.swift_name = swift_name
        self.default_currency = currency
        self.queue_name = queue_name
        self._rng = rng or random.Random()
        self.branch_code = self.generate_branch_code(self._rng)
        self._accounts: list[Account] | tuple[Account, ...] = []
        self._frozen = False

    def __repr__(self) -> str:
        return f"Bank({self.swift_name}, queue={self.queue_name!r}, accounts={len(self._accounts)})"

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting new accounts. Safe to call more than once."""
        if not self._frozen:
            self._accounts = tuple(self._accounts)
            self._frozen = True

    def open_account(self, name: str, starting_balance: int = DEFAULT_STARTING_BALANCE) -> bool:
        """Open an account with a fresh, bank-unique 20-digit number.

        Returns False for an empty holder name. Negative starting balances
        are clamped to zero.
        """
        if self._frozen:
            raise InvalidBankStateError(f"Bank {self.name} is frozen; cannot open accounts")
        if not name:
            return False
        starting_balance = max(0, starting_balance)

        taken = {a.number for a in self._accounts}
        number = self.generate_account_number(self._rng)
        while number in taken:
            logger.debug("Account number collision in %s, regenerating", self.swift_name)
            number = self.generate_account_number(self._rng)

        self._accounts.append(Account(name, number, starting_balance))
        return True

    def account_by_number(self, number: str) -> Account | None:
        for account in self._accounts:
            if account.number == number:
                return account
        return None

    def accounts_by_name(self, name: str) -> list[Account]:
        return [a for a in self._accounts if a.name == name]

    def random_account(self, rng: random.Random | None = None) -> Account:
        """Pick an account uniformly. The bank must hold at least one."""
        if not self._accounts:
            raise InvalidBankStateError(f"Bank {self.name} has no accounts")
        return (rng or self._rng).choice(self._accounts)

    def total_balance(self) -> int:
        return sum(a.balance for a in self._accounts)

    def summary_lines(self) -> list[str]:
        """Human-readable summary of the bank and its accounts."""
        lines = [
            "-- Start Bank --",
            f"BANK: {self.name}",
            f"SWIFT: {self.swift_name}",
            f"BRANCH: {self.branch_code}",
            f"QNAME: {self.queue_name}",
            f"CURRENCY: {self.default_currency.swift_code}",
            f"Accounts: {len(self._accounts)}",
        ]
        for i, account in enumerate(self._accounts):
            lines.append(f"  Account {i}: {account.describe()}")
        lines.append("-- End Bank --")
        return lines

    @staticmethod
    def generate_account_number(rng: random.Random | None = None) -> str:
        """Random 20-digit account number; each digit uniform in 0..9."""
        rng = rng or random
        return "".join(str(rng.randint(0, 9)) for _ in range(ACCOUNT_NUMBER_LENGTH))

    @staticmethod
    def generate_branch_code(rng: random.Random | None = None) -> str:
        """Random 3-character branch code drawn from A..G."""
        rng = rng or random
        return "".join(rng.choice(BRANCH_CODE_CHARS) for _ in range(BRANCH_CODE_LENGTH))

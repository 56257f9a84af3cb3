"""Receiver worker: consume MT103 messages and credit local accounts."""

from __future__ import annotations

import logging

from mt103_sim.codec.mt103 import decode
from mt103_sim.exceptions import UnknownAccount
from mt103_sim.workers.base import Worker

logger = logging.getLogger(__name__)


class MoneyReceiver(Worker):
    """Simulate money arriving at a bank from other banks.

    Each iteration:

    1. Wait up to ``receive_timeout`` for a message on the bank's queue.
    2. Decode it as an MT103 payment.
    3. Find the destination account within the bank.
    4. Credit the payment amount to that account.

    Decode failures, broker errors and unknown accounts are counted; more
    than ``max_failures`` of them stops the worker.
    """

    kind = "receiver"

    def step(self) -> None:
        message = self.broker.receive(self.bank.queue_name, self.config.receive_timeout)
        if not message:
            return
        self.stats.received += 1

        payment = decode(message, strict=self.config.strict_checksum)
        account = self.bank.account_by_number(payment.dest_account)
        if account is None:
            raise UnknownAccount(
                f"Failed to find account {payment.dest_account} in bank {self.bank.name}"
            )

        account.credit(payment.amount)
        self.stats.credited += 1
        self.stats.amount_credited += payment.amount
        logger.info("%s credited %s", self.name, payment.summary())

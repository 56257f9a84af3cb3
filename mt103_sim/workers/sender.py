"""Sender worker: debit local accounts and publish MT103 payments to peers."""

from __future__ import annotations

import logging
import random

from mt103_sim.brokers.base import Broker
from mt103_sim.codec.mt103 import encode
from mt103_sim.config import WorkerConfig
from mt103_sim.exceptions import MT103SimError
from mt103_sim.models.bank import Bank
from mt103_sim.models.payment import Payment
from mt103_sim.workers.base import Worker

logger = logging.getLogger(__name__)

SESSION_RANGE = 10000


class MoneySender(Worker):
    """Simulate money being sent from a bank to its peers.

    Each iteration:

    1. Pick a random local account, a random peer bank and an account
       there.
    2. Debit a random amount from the local account. A zero amount means
       nothing to send this tick.
    3. Encode an MT103 payment and publish it to the peer's queue.
    4. Advance the sequence number and sleep for a random delay.

    Money debited for a payment that could not be built or sent is gone;
    it is tracked in ``stats.amount_lost``.
    """

    kind = "sender"

    def __init__(
        self,
        broker: Broker,
        bank: Bank,
        config: WorkerConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(broker, bank, config, rng)
        self.peers: list[Bank] = []
        self.session = self.rng.randrange(SESSION_RANGE)
        self.seq = 0

    def add_peer(self, bank: Bank) -> None:
        """Register another bank to send money to. Call before starting."""
        if bank is None:
            raise ValueError("Invalid parameters: peer bank is required")
        if bank is self.bank:
            raise ValueError(f"{self.bank.swift_name} cannot be its own peer")
        self.peers.append(bank)

    def _prepare(self) -> bool:
        if not self.peers:
            logger.error("Cannot start %s as it has no peer banks.", self.name)
            return False
        return True

    def _lose(self, amount: int) -> None:
        self.stats.amount_lost += amount
        self._record_failure()

    def step(self) -> None:
        sender = self.bank.random_account(self.rng)
        peer = self.rng.choice(self.peers)
        receiver = peer.random_account(self.rng)

        amount = sender.debit_random(self.rng)
        if amount == 0:
            self.sleep(self._delay())
            return

        # From here on the money has left the payer: any failure is an in-flight loss.
        try:
            payment = Payment.create(
                send_bank=self.bank.swift_name,
                send_branch=self.bank.branch_code,
                send_account=sender.number,
                send_name=sender.name,
                dest_bank=peer.swift_name,
                dest_branch=peer.branch_code,
                dest_account=receiver.number,
                dest_name=receiver.name,
                amount=amount,
                currency=self.bank.default_currency,
                session=self.session,
                seq=self.seq,
                rng=self.rng,
            )
            self.broker.send(peer.queue_name, encode(payment))
        except MT103SimError as e:
            logger.error(
                "Failed to send %d from %s to queue %s: %s",
                amount,
                self.bank.swift_name,
                peer.queue_name,
                e,
            )
            self._lose(amount)
        except Exception:
            logger.exception(
                "Unexpected error sending %d from %s to queue %s",
                amount,
                self.bank.swift_name,
                peer.queue_name,
            )
            self._lose(amount)
        else:
            self.stats.sent += 1
            self.stats.amount_sent += amount
            logger.debug("%s sent %s", self.name, payment.summary())

        self.seq += 1
        self.sleep(self._delay())

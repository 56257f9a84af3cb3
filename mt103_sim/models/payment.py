"""Payment model: the fields carried by one MT103 credit transfer."""

from __future__ import annotations

import random
from dataclasses import dataclass

from mt103_sim.codec.fields import (
    SEQ_PLACES,
    SESSION_PLACES,
    generate_reference,
    int_to_str_place,
)
from mt103_sim.exceptions import BadName
from mt103_sim.models.currency import Currency

NAME_PREFIX_LENGTH = 3


def transaction_reference(send_name: str, dest_name: str, seq: int | str) -> str:
    """Build field 20: ``ROBTOHAR42`` for Rob Parker -> Harry Houdini, seq 42."""
    for name in (send_name, dest_name):
        if len(name) < NAME_PREFIX_LENGTH:
            raise BadName(
                f"Name {name!r} is shorter than {NAME_PREFIX_LENGTH} characters; "
                "cannot build a transaction reference"
            )
    return (
        send_name[:NAME_PREFIX_LENGTH].upper()
        + "TO"
        + dest_name[:NAME_PREFIX_LENGTH].upper()
        + str(seq)
    )


@dataclass(frozen=True)
class Payment:
    """Single customer credit transfer.

    ``session`` and ``seq`` hold the fixed-width strings that appear in the
    header block; ``transaction_ref`` uses the raw sequence number.
    """

    send_bank: str
    send_branch: str
    send_account: str
    send_name: str
    dest_bank: str
    dest_branch: str
    dest_account: str
    dest_name: str
    amount: int
    currency: Currency
    session: str
    seq: str
    reference3: str
    transaction_ref: str

    @classmethod
    def create(
        cls,
        send_bank: str,
        send_branch: str,
        send_account: str,
        send_name: str,
        dest_bank: str,
        dest_branch: str,
        dest_account: str,
        dest_name: str,
        amount: int,
        currency: Currency,
        session: int,
        seq: int,
        rng: random.Random | None = None,
    ) -> "Payment":
        """Build an outgoing payment with a fresh 16-character reference."""
        return cls(
            send_bank=send_bank,
            send_branch=send_branch,
            send_account=send_account,
            send_name=send_name,
            dest_bank=dest_bank,
            dest_branch=dest_branch,
            dest_account=dest_account,
            dest_name=dest_name,
            amount=amount,
            currency=currency,
            session=int_to_str_place(session, SESSION_PLACES),
            seq=int_to_str_place(seq, SEQ_PLACES),
            reference3=generate_reference(rng=rng),
            transaction_ref=transaction_reference(send_name, dest_name, seq),
        )

    def summary(self) -> str:
        """Short form, e.g. ``BANKROBE/Rob Parker/250,00GBP->BANKGRAH/Harry Houdini``."""
        return (
            f"{self.send_bank}/{self.send_name}/{self.amount},00{self.currency.swift_code}"
            f"->{self.dest_bank}/{self.dest_name}"
        )

"""MT103 encoder and decoder.

A message is a run of text blocks separated by CR-LF::

    {1:F01<sendBank>Z<branch><session><seq>}{2:I103<destBank>X<branch>N1020}{3:{113:SEPA}{108:<ref>}}{4:
    :20:<transaction ref>
    :23B:CRED
    :32A:<YYMMDD><CCY><amount>,00
    :50A:/<account> <name>
    :59:/<account> <name>
    :70:INVOICE <seq>
    :71A:SHA
    -}
    {5:{CHK:<md5>}}

The header line is read back by fixed offsets, so the encoder must keep
every header field at its exact width.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from mt103_sim.codec.fields import checksum, format_date
from mt103_sim.exceptions import BadCurrency, DecodeError
from mt103_sim.models.currency import Currency
from mt103_sim.models.payment import Payment

logger = logging.getLogger(__name__)

CRLF = "\r\n"
MIN_LINES = 10

# Offsets into header line 0
SEND_BANK = slice(6, 14)
SEND_BRANCH = slice(15, 18)
SESSION = slice(18, 22)
SEQ = slice(22, 28)
DEST_BANK = slice(36, 44)
DEST_BRANCH = slice(45, 48)
REFERENCE = slice(72, 88)
HEADER_MIN_LENGTH = 88

# Offsets into the 32A line
CURRENCY = slice(11, 14)
AMOUNT_START = 14

FOOTER_RE = re.compile(r"^\{5:\{CHK:([0-9a-f]{32})\}\}$")


def encode(payment: Payment, on: date | None = None) -> str:
    """Render a payment as an MT103 message.

    Parameters
    ----------
    payment : Payment
        Payment to send.
    on : date | None
        Value date for field 32A (defaults to today, local time).

    Returns
    -------
    str
        Complete message including the ``{5:{CHK:...}}`` footer.
    """
    message = (
        f"{{1:F01{payment.send_bank}Z{payment.send_branch}{payment.session}{payment.seq}}}"
        f"{{2:I103{payment.dest_bank}X{payment.dest_branch}N1020}}"
        f"{{3:{{113:SEPA}}{{108:{payment.reference3}}}}}"
        "{4:" + CRLF
    )
    message += f":20:{payment.transaction_ref}" + CRLF
    message += ":23B:CRED" + CRLF
    message += f":32A:{format_date(on)}{payment.currency.swift_code}{payment.amount},00" + CRLF
    message += f":50A:/{payment.send_account} {payment.send_name}" + CRLF
    message += f":59:/{payment.dest_account} {payment.dest_name}" + CRLF
    message += f":70:INVOICE {payment.seq}" + CRLF
    message += ":71A:SHA" + CRLF
    message += "-}" + CRLF
    message += f"{{5:{{CHK:{checksum(message)}}}}}"
    return message


def decode(message: str, strict: bool = False) -> Payment:
    """Parse an MT103 message back into a :class:`Payment`.

    The value date is discarded. With ``strict`` the footer checksum is
    verified as well.

    Raises
    ------
    DecodeError
        If the message is malformed, the amount is not an integer or the
        currency is unknown.
    """
    lines = message.split(CRLF)
    if len(lines) < MIN_LINES:
        raise DecodeError(f"Expected at least {MIN_LINES} lines, got {len(lines)}")

    header = lines[0]
    if len(header) < HEADER_MIN_LENGTH or not header.startswith("{1:F01"):
        raise DecodeError(f"Malformed header block: {header!r}")

    if strict:
        verify_checksum(lines)

    transaction_ref = _field(lines[1], ":20:")
    currency, amount = _parse_value(lines[3])
    send_account, send_name = _parse_party(lines[4], ":50A:/")
    dest_account, dest_name = _parse_party(lines[5], ":59:/")

    return Payment(
        send_bank=header[SEND_BANK],
        send_branch=header[SEND_BRANCH],
        send_account=send_account,
        send_name=send_name,
        dest_bank=header[DEST_BANK],
        dest_branch=header[DEST_BRANCH],
        dest_account=dest_account,
        dest_name=dest_name,
        amount=amount,
        currency=currency,
        session=header[SESSION],
        seq=header[SEQ],
        reference3=header[REFERENCE],
        transaction_ref=transaction_ref,
    )


def verify_checksum(lines: list[str]) -> None:
    """Check the ``{5:{CHK:...}}`` footer against the body it follows."""
    match = FOOTER_RE.match(lines[9])
    if match is None:
        raise DecodeError(f"Missing or malformed checksum footer: {lines[9]!r}")
    body = CRLF.join(lines[:9]) + CRLF
    expected = checksum(body)
    if match.group(1) != expected:
        raise DecodeError(f"Checksum mismatch: footer {match.group(1)}, body {expected}")


def _field(line: str, tag: str) -> str:
    if not line.startswith(tag):
        raise DecodeError(f"Expected field {tag!r}, got {line!r}")
    return line[len(tag):]


def _parse_value(line: str) -> tuple[Currency, int]:
    _field(line, ":32A:")
    try:
        currency = Currency.parse(line[CURRENCY])
    except BadCurrency as e:
        raise DecodeError(str(e)) from e
    end = line.find(",", AMOUNT_START)
    if end == -1:
        raise DecodeError(f"Amount has no decimal separator: {line!r}")
    digits = line[AMOUNT_START:end]
    if not (digits.isascii() and digits.isdigit()):
        raise DecodeError(f"Unparsable amount {digits!r}")
    return currency, int(digits)


def _parse_party(line: str, tag: str) -> tuple[str, str]:
    account, sep, name = _field(line, tag).partition(" ")
    if not sep or not account:
        raise DecodeError(f"Expected '<account> <name>' in {line!r}")
    return account, name

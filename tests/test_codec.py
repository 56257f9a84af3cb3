"""Tests for the MT103 encoder/decoder and field helpers."""

import hashlib
from dataclasses import replace
from datetime import date

import pytest

from mt103_sim.codec.fields import (
    checksum,
    format_date,
    generate_reference,
    int_to_str_place,
)
from mt103_sim.codec.mt103 import decode, encode
from mt103_sim.exceptions import DecodeError
from mt103_sim.models import Currency, Payment

VALUE_DATE = date(2026, 10, 19)


class TestFieldHelpers:
    """Tests for fixed-width helpers."""

    @pytest.mark.parametrize(
        "value,places,expected",
        [
            (7, 4, "0007"),
            (0, 4, "0000"),
            (42, 6, "000042"),
            (1234, 4, "1234"),
            (12345, 4, "2345"),
            (1234567, 6, "234567"),
        ],
    )
    def test_int_to_str_place(self, value: int, places: int, expected: str) -> None:
        assert int_to_str_place(value, places) == expected

    def test_generate_reference(self) -> None:
        ref = generate_reference()

        assert len(ref) == 16
        assert all(c.isdigit() or "A" <= c <= "Z" for c in ref)

    def test_format_date(self) -> None:
        assert format_date(VALUE_DATE) == "261019"

    def test_format_date_defaults_to_today(self) -> None:
        assert format_date() == date.today().strftime("%y%m%d")

    def test_checksum(self) -> None:
        assert checksum("abc") == hashlib.md5(b"abc").hexdigest()


class TestEncode:
    """Tests for MT103 encoding."""

    def test_header_prefix(self, sample_payment: Payment) -> None:
        header = encode(sample_payment, VALUE_DATE).split("\r\n")[0]
        assert header.startswith("{1:F01BANKROBEZABC00070000")

    def test_header_offsets(self, sample_payment: Payment) -> None:
        header = encode(sample_payment, VALUE_DATE).split("\r\n")[0]

        assert header[6:14] == "BANKROBE"
        assert header[14] == "Z"
        assert header[15:18] == "ABC"
        assert header[18:22] == "0007"
        assert header[22:28] == "000000"
        assert header[28:36] == "}{2:I103"
        assert header[36:44] == "BANKGRAH"
        assert header[44] == "X"
        assert header[45:48] == "DEF"
        assert header[48:72] == "N1020}{3:{113:SEPA}{108:"
        assert header[72:88] == sample_payment.reference3
        assert header[88:] == "}}{4:"

    def test_full_layout(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE)
        lines = message.split("\r\n")

        assert len(lines) == 10
        assert lines[1] == ":20:ROBTOHAR0"
        assert lines[2] == ":23B:CRED"
        assert lines[3] == ":32A:261019GBP250,00"
        assert lines[4] == ":50A:/12345678901234567890 Rob Parker"
        assert lines[5] == ":59:/09876543210987654321 Harry Houdini"
        assert lines[6] == ":70:INVOICE 000000"
        assert lines[7] == ":71A:SHA"
        assert lines[8] == "-}"
        assert lines[9].startswith("{5:{CHK:")

    def test_amount_field(self, sample_payment: Payment) -> None:
        message = encode(sample_payment)
        line = next(l for l in message.split("\r\n") if l.startswith(":32A:"))
        assert line == f":32A:{date.today().strftime('%y%m%d')}GBP250,00"

    def test_transaction_reference_field(self) -> None:
        payment = Payment.create(
            "BANKROBE", "ABC", "1" * 20, "Rob Parker",
            "BANKGRAH", "DEF", "2" * 20, "Harry Houdini",
            5, Currency.EUR, session=1, seq=42,
        )
        assert ":20:ROBTOHAR42\r\n" in encode(payment)

    def test_checksum_covers_body(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE)
        body, footer = message[: message.index("{5:")], message[message.index("{5:"):]

        assert body.endswith("-}\r\n")
        assert footer == "{5:{CHK:" + hashlib.md5(body.encode("utf-8")).hexdigest() + "}}"

    def test_same_inputs_same_date_identical(self, sample_payment: Payment) -> None:
        assert encode(sample_payment, VALUE_DATE) == encode(sample_payment, VALUE_DATE)


class TestDecode:
    """Tests for MT103 decoding."""

    def test_round_trip(self, sample_payment: Payment) -> None:
        assert decode(encode(sample_payment, VALUE_DATE)) == sample_payment

    def test_decoded_fields(self, sample_payment: Payment) -> None:
        decoded = decode(encode(sample_payment))

        assert decoded.send_bank == "BANKROBE"
        assert decoded.send_branch == "ABC"
        assert decoded.session == "0007"
        assert decoded.seq == "000000"
        assert decoded.dest_bank == "BANKGRAH"
        assert decoded.dest_branch == "DEF"
        assert decoded.transaction_ref == "ROBTOHAR0"
        assert decoded.currency is Currency.GBP
        assert decoded.amount == 250
        assert decoded.send_account == "12345678901234567890"
        assert decoded.send_name == "Rob Parker"
        assert decoded.dest_account == "09876543210987654321"
        assert decoded.dest_name == "Harry Houdini"

    def test_large_amount(self, sample_payment: Payment) -> None:
        payment = replace(sample_payment, amount=123456789)
        assert decode(encode(payment)).amount == 123456789

    def test_too_few_lines(self, sample_payment: Payment) -> None:
        message = encode(sample_payment)
        with pytest.raises(DecodeError, match="at least 10 lines"):
            decode("\r\n".join(message.split("\r\n")[:6]))

    def test_short_header(self, sample_payment: Payment) -> None:
        message = encode(sample_payment)
        lines = message.split("\r\n")
        lines[0] = lines[0][:40]
        with pytest.raises(DecodeError, match="header"):
            decode("\r\n".join(lines))

    def test_garbage(self) -> None:
        with pytest.raises(DecodeError):
            decode("not an MT103 message")

    def test_unknown_currency(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE).replace("GBP250,00", "XYZ250,00")
        with pytest.raises(DecodeError, match="Unknown currency"):
            decode(message)

    def test_unparsable_amount(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE).replace("GBP250,00", "GBP2x0,00")
        with pytest.raises(DecodeError, match="amount"):
            decode(message)

    def test_missing_decimal_separator(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE).replace("GBP250,00", "GBP25000")
        with pytest.raises(DecodeError):
            decode(message)

    def test_missing_party_separator(self, sample_payment: Payment) -> None:
        message = encode(sample_payment).replace(
            ":59:/09876543210987654321 Harry Houdini", ":59:/09876543210987654321"
        )
        with pytest.raises(DecodeError):
            decode(message)

    def test_checksum_ignored_by_default(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE).replace("GBP250,00", "GBP999,00")
        assert decode(message).amount == 999

    def test_strict_accepts_valid_message(self, sample_payment: Payment) -> None:
        assert decode(encode(sample_payment), strict=True).amount == 250

    def test_strict_rejects_tampered_message(self, sample_payment: Payment) -> None:
        message = encode(sample_payment, VALUE_DATE).replace("GBP250,00", "GBP999,00")
        with pytest.raises(DecodeError, match="Checksum mismatch"):
            decode(message, strict=True)

    def test_strict_rejects_missing_footer(self, sample_payment: Payment) -> None:
        message = encode(sample_payment)
        message = message[: message.index("{5:")] + "{5:}"
        with pytest.raises(DecodeError, match="footer"):
            decode(message, strict=True)

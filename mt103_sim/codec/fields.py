"""Fixed-width field helpers shared by payment construction and the codec."""

from __future__ import annotations

import hashlib
import random
from datetime import date

REFERENCE_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
REFERENCE_LENGTH = 16
SESSION_PLACES = 4
SEQ_PLACES = 6


def int_to_str_place(value: int, places: int) -> str:
    """Left-pad ``value`` with zeros to ``places`` characters.

    A decimal that is already longer than ``places`` loses its first
    character and is returned otherwise untouched (``1234567`` with 6
    places gives ``234567``). Peers depend on this exact truncation.
    """
    current = str(value)
    if len(current) > places:
        return current[1:]
    return current.rjust(places, "0")


def generate_reference(length: int = REFERENCE_LENGTH, rng: random.Random | None = None) -> str:
    """Random reference of ``A-Z0-9`` characters."""
    rng = rng or random
    return "".join(rng.choice(REFERENCE_CHARS) for _ in range(length))


def format_date(on: date | None = None) -> str:
    """Value date as YYMMDD, local date by default."""
    return (on or date.today()).strftime("%y%m%d")


def checksum(body: str) -> str:
    """Lowercase hex MD5 fingerprint of a message body."""
    return hashlib.md5(body.encode("utf-8")).hexdigest()

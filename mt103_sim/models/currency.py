"""Currency enumeration for MT103 payments."""

from enum import Enum

from mt103_sim.exceptions import BadCurrency


class Currency(str, Enum):
    EUR = "EUR"
    GBP = "GBP"
    USD = "USD"

    @property
    def swift_code(self) -> str:
        """Three-letter code written into field 32A."""
        return self.value

    @classmethod
    def parse(cls, code: str) -> "Currency":
        """Parse a currency code, ignoring case.

        Raises
        ------
        BadCurrency
            If the code is not one of the supported currencies.
        """
        try:
            return cls(code.upper())
        except (AttributeError, ValueError):
            raise BadCurrency(f"Unknown currency {code}") from None

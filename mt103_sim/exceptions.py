"""Custom exception hierarchy for mt103-sim."""


class MT103SimError(Exception):
    """Base exception for all mt103-sim errors."""


class BadBic(MT103SimError):
    """Raised when a SWIFT name is not exactly 8 characters."""


class BadCurrency(MT103SimError):
    """Raised when a currency code is not recognised."""


class BadName(MT103SimError):
    """Raised when a holder name is too short to build a transaction reference."""


class DecodeError(MT103SimError):
    """Raised when an MT103 message cannot be parsed."""


class UnknownAccount(MT103SimError):
    """Raised when a payment names an account the bank does not hold."""


class BrokerError(MT103SimError):
    """Raised when a broker send or receive fails."""


class ConfigurationError(MT103SimError):
    """Raised when configuration is invalid or missing."""


class InvalidBankStateError(MT103SimError):
    """Raised when a bank is in an invalid state for the operation."""

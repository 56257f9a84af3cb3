"""Tests for custom exception hierarchy."""

import pytest

from mt103_sim.exceptions import (
    BadBic,
    BadCurrency,
    BadName,
    BrokerError,
    ConfigurationError,
    DecodeError,
    InvalidBankStateError,
    MT103SimError,
    UnknownAccount,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(MT103SimError("test"), Exception)

    @pytest.mark.parametrize(
        "error_class",
        [
            BadBic,
            BadCurrency,
            BadName,
            BrokerError,
            ConfigurationError,
            DecodeError,
            InvalidBankStateError,
            UnknownAccount,
        ],
    )
    def test_error_is_mt103_sim_error(self, error_class: type) -> None:
        assert isinstance(error_class("test"), MT103SimError)

    def test_exception_message(self) -> None:
        err = UnknownAccount("Failed to find account 123 in bank BankOfRob")
        assert str(err) == "Failed to find account 123 in bank BankOfRob"

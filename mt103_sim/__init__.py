"""mt103-sim: banks exchanging SWIFT MT103 payments through a message broker."""

__version__ = "0.1.0"

from mt103_sim.codec.mt103 import decode, encode
from mt103_sim.models import Account, Bank, Currency, Payment

__all__ = ["Account", "Bank", "Currency", "Payment", "decode", "encode"]

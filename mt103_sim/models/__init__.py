"""Domain models for the payment simulator."""

from mt103_sim.models.account import Account, AccountSnapshot
from mt103_sim.models.bank import Bank
from mt103_sim.models.currency import Currency
from mt103_sim.models.payment import Payment

__all__ = ["Account", "AccountSnapshot", "Bank", "Currency", "Payment"]

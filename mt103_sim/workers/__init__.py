"""Payment workers and their supervisor."""

from mt103_sim.workers.base import Worker, WorkerState, WorkerStats
from mt103_sim.workers.receiver import MoneyReceiver
from mt103_sim.workers.sender import MoneySender
from mt103_sim.workers.supervisor import Supervisor

__all__ = [
    "MoneyReceiver",
    "MoneySender",
    "Supervisor",
    "Worker",
    "WorkerState",
    "WorkerStats",
]

"""Data-pass synchronization: period resolution, reconciliation and scheduling."""

from __future__ import annotations

from .contracts import ChangeKind, DataPassOutcome, OutcomeStatus, SynchronizationReport
from .engine import DataPassSynchronizer
from .resolve import LhcPeriodResolver
from .scheduling import PeriodicSynchronization, SingleFlight

__all__ = [
    "ChangeKind",
    "DataPassOutcome",
    "DataPassSynchronizer",
    "LhcPeriodResolver",
    "OutcomeStatus",
    "PeriodicSynchronization",
    "SingleFlight",
    "SynchronizationReport",
]

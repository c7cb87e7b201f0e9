"""Domain model package."""

from __future__ import annotations

from .bookkeeping import DataPass, DataPassRun, LhcPeriod
from .entity import Entity, new_id

__all__ = [
    "DataPass",
    "DataPassRun",
    "Entity",
    "LhcPeriod",
    "new_id",
]

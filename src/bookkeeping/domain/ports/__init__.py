"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import DataPassDetails, DataPassRecord, DataPassSource
from .persistence import (
    DataPassRepository,
    DataPassRunRepository,
    LhcPeriodRepository,
    Repository,
)
from .unit_of_work import (
    BookkeepingRepositories,
    BookkeepingUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BookkeepingRepositories",
    "BookkeepingUnitOfWork",
    "DataPassDetails",
    "DataPassRecord",
    "DataPassRepository",
    "DataPassRunRepository",
    "DataPassSource",
    "LhcPeriodRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]

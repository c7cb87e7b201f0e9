"""SQLAlchemy adapter package for the bookkeeping store."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyDataPassRepository,
    SqlAlchemyDataPassRunRepository,
    SqlAlchemyLhcPeriodRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, StartupError, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyDataPassRepository",
    "SqlAlchemyDataPassRunRepository",
    "SqlAlchemyLhcPeriodRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]

"""Resolve (or lazily create) the LHC periods referenced by data passes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger

from bookkeeping.domain.lhc_periods import extract_lhc_period
from bookkeeping.domain.model import LhcPeriod
from bookkeeping.domain.ports.unit_of_work import BookkeepingUnitOfWork

UnitOfWorkFactory = Callable[[], BookkeepingUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True)
class LhcPeriodResolver:
    """Find-or-create LHC periods by name, memoised for one synchronization run.

    The cache makes a second resolution of the same name return the same record
    without touching the store. Periods are committed in their own unit of work
    so a data pass never references a period that is not yet persisted.
    """

    unit_of_work_factory: UnitOfWorkFactory
    _cache: dict[str, LhcPeriod] = field(default_factory=dict[str, LhcPeriod], init=False)

    def resolve(self, period_name: str) -> LhcPeriod:
        cached = self._cache.get(period_name)
        if cached is not None:
            return cached

        with self.unit_of_work_factory() as uow:
            repository = uow.repositories.lhc_periods
            period = repository.get_by_name(period_name)
            if period is None:
                key = extract_lhc_period(period_name)
                period = LhcPeriod(name=key.name, year=key.year, period_code=key.period_code)
                repository.add(period)
                uow.commit()
                log.info("Created LHC period %s (%s)", period.name, period.year)

        self._cache[period_name] = period
        return period

    @property
    def resolved(self) -> tuple[str, ...]:
        return tuple(self._cache)

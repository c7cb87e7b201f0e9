"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from bookkeeping.adapters.monalisa import build_monalisa_source
from bookkeeping.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from bookkeeping.config.sync import get_sync_config
from bookkeeping.domain.ports.unit_of_work import BookkeepingUnitOfWork
from bookkeeping.domain.synchronization import (
    DataPassSynchronizer,
    PeriodicSynchronization,
    SingleFlight,
    SynchronizationReport,
)

if TYPE_CHECKING:
    import threading

    from bookkeeping.domain.model import DataPass
    from bookkeeping.domain.ports.fetching import DataPassSource

UnitOfWorkFactory = Callable[[], BookkeepingUnitOfWork]


log = getLogger(__name__)

_data_pass_synchronization = SingleFlight("MonALISA data-pass synchronization")


def _resolve_unit_of_work_factory(
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def synchronize_data_passes(
    *,
    source: DataPassSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    year_lower_limit: int | None = None,
    cancel_event: threading.Event | None = None,
) -> SynchronizationReport | None:
    """Synchronize MonALISA data passes into the bookkeeping store.

    Returns ``None`` when another synchronization is still running; the
    trigger is dropped rather than queued.
    """

    def run() -> SynchronizationReport:
        effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
        effective_source = source or build_monalisa_source()
        limit = year_lower_limit if year_lower_limit is not None else (
            get_sync_config().year_lower_limit
        )
        log.info("Starting MonALISA data-pass sync: year_lower_limit=%s", limit)

        report = DataPassSynchronizer(
            source=effective_source,
            unit_of_work_factory=effective_uow,
            year_lower_limit=limit,
            cancel_event=cancel_event,
        ).synchronize()

        log.info(
            "Finished MonALISA data-pass sync: processed=%s, created=%s, updated=%s, "
            "unchanged=%s, linked_runs=%s, failed_details=%s, skipped=%s, cancelled=%s",
            report.processed,
            report.created,
            report.updated,
            report.unchanged,
            report.linked_runs,
            len(report.failed_detail_fetches),
            len(report.skipped),
            report.cancelled,
        )
        return report

    return _data_pass_synchronization.run(run)


def schedule_data_pass_synchronization(
    *,
    interval_seconds: float | None = None,
    stop_event: threading.Event | None = None,
    source: DataPassSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    year_lower_limit: int | None = None,
) -> PeriodicSynchronization:
    """Build the periodic trigger; call ``run_forever()`` on the result to start it.

    Setting the stop event ends the loop and cancels the run in progress after
    its current data pass.
    """

    interval = interval_seconds if interval_seconds is not None else (
        get_sync_config().period_seconds
    )
    schedule: PeriodicSynchronization

    def trigger() -> SynchronizationReport | None:
        return synchronize_data_passes(
            source=source,
            unit_of_work_factory=unit_of_work_factory,
            year_lower_limit=year_lower_limit,
            cancel_event=schedule.stop_event,
        )

    schedule = PeriodicSynchronization(
        trigger, interval_seconds=interval, stop_event=stop_event
    )
    return schedule


def list_data_passes(
    *,
    period_name: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[DataPass]:
    """Return stored data passes ordered by name, optionally for one LHC period."""

    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        return uow.repositories.data_passes.find_all(period_name=period_name)

"""Reconcile data passes from an external source against the bookkeeping store.

One run:

1. list every data pass from the source (a failure aborts the run);
2. keep those whose LHC period started in or after the configured year,
   skipping names that carry no recognisable period;
3. per data pass, in input order: resolve its period, upsert the data pass,
   then fetch its details and link the run numbers not linked yet.

Writes are committed per data pass. A failed detail fetch is reported and the
run moves on; store failures abort the run and propagate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bookkeeping.domain.errors import DatasetDetailFetchError, ExternalSourceError
from bookkeeping.domain.lhc_periods import LhcPeriodKey, LhcPeriodParseError, extract_lhc_period
from bookkeeping.domain.model import DataPass
from bookkeeping.domain.ports.unit_of_work import BookkeepingUnitOfWork

from .contracts import ChangeKind, DataPassOutcome, OutcomeStatus, SynchronizationReport
from .resolve import LhcPeriodResolver

if TYPE_CHECKING:
    import threading
    from collections.abc import Sequence
    from uuid import UUID

    from bookkeeping.domain.ports.fetching import DataPassDetails, DataPassRecord, DataPassSource

UnitOfWorkFactory = Callable[[], BookkeepingUnitOfWork]

log = getLogger(__name__)

MUTABLE_ATTRIBUTES = (
    "description",
    "output_size",
    "reconstructed_events_count",
    "last_run_number",
)


@dataclass(frozen=True, slots=True)
class _Candidate:
    record: DataPassRecord
    period: LhcPeriodKey


@dataclass(slots=True)
class DataPassSynchronizer:
    """Synchronize data passes, their LHC periods and their run links."""

    source: DataPassSource
    unit_of_work_factory: UnitOfWorkFactory
    year_lower_limit: int
    cancel_event: threading.Event | None = None

    def synchronize(self) -> SynchronizationReport:
        """Run one synchronization and return its aggregate report."""

        records = self.source.get_data_passes()
        candidates, skipped = self._select_candidates(records)
        log.info(
            "Synchronizing %s of %s data passes (year >= %s, %s skipped)",
            len(candidates),
            len(records),
            self.year_lower_limit,
            len(skipped),
        )

        resolver = LhcPeriodResolver(self.unit_of_work_factory)
        outcomes: list[DataPassOutcome] = []
        cancelled = False
        for candidate in candidates:
            if self.cancel_event is not None and self.cancel_event.is_set():
                log.warning(
                    "Synchronization cancelled after %s of %s data passes",
                    len(outcomes),
                    len(candidates),
                )
                cancelled = True
                break
            outcomes.append(self._synchronize_data_pass(candidate, resolver))

        log.info("Resolved LHC periods: %s", ", ".join(resolver.resolved) or "none")
        return SynchronizationReport.from_outcomes(outcomes, skipped=skipped, cancelled=cancelled)

    def _select_candidates(
        self, records: Sequence[DataPassRecord]
    ) -> tuple[list[_Candidate], list[str]]:
        candidates: list[_Candidate] = []
        skipped: list[str] = []
        for record in records:
            try:
                period = extract_lhc_period(record.name)
            except LhcPeriodParseError as exc:
                log.warning("Skipping data pass: %s", exc)
                skipped.append(record.name)
                continue
            if period.year < self.year_lower_limit:
                continue
            candidates.append(_Candidate(record=record, period=period))
        return candidates, skipped

    def _synchronize_data_pass(
        self, candidate: _Candidate, resolver: LhcPeriodResolver
    ) -> DataPassOutcome:
        record = candidate.record
        period = resolver.resolve(candidate.period.name)
        data_pass_id, change = self._upsert_data_pass(record, lhc_period_id=period.id)

        try:
            details = self._fetch_details(record)
        except DatasetDetailFetchError as exc:
            log.warning("Could not fetch details of data pass %s: %s", record.name, exc)
            return DataPassOutcome(
                name=record.name,
                change=change,
                status=OutcomeStatus.DETAILS_FAILED,
                error=exc,
            )

        linked = self._link_runs(data_pass_id, details.run_numbers)
        if linked:
            log.info("Linked %s new runs to data pass %s", linked, record.name)
        return DataPassOutcome(name=record.name, change=change, linked_runs=linked)

    def _upsert_data_pass(
        self, record: DataPassRecord, *, lhc_period_id: UUID
    ) -> tuple[UUID, ChangeKind]:
        with self.unit_of_work_factory() as uow:
            repository = uow.repositories.data_passes
            data_pass = repository.get_by_name(record.name)
            if data_pass is None:
                data_pass = DataPass(
                    name=record.name,
                    lhc_period_id=lhc_period_id,
                    description=record.description,
                    output_size=record.output_size,
                    reconstructed_events_count=record.reconstructed_events_count,
                    last_run_number=record.last_run_number,
                )
                repository.add(data_pass)
                change = ChangeKind.CREATED
            elif _apply_record(data_pass, record):
                repository.update(data_pass)
                change = ChangeKind.UPDATED
            else:
                return data_pass.id, ChangeKind.UNCHANGED
            uow.commit()
            return data_pass.id, change

    def _fetch_details(self, record: DataPassRecord) -> DataPassDetails:
        try:
            return self.source.get_data_pass_details(record.description)
        except ExternalSourceError as exc:
            raise DatasetDetailFetchError(record.name, str(exc)) from exc

    def _link_runs(self, data_pass_id: UUID, run_numbers: Sequence[int]) -> int:
        with self.unit_of_work_factory() as uow:
            repository = uow.repositories.data_pass_runs
            missing = set(run_numbers) - repository.linked_run_numbers(data_pass_id)
            if not missing:
                return 0
            added = repository.add_links(data_pass_id, sorted(missing))
            uow.commit()
            return added


def _apply_record(data_pass: DataPass, record: DataPassRecord) -> bool:
    """Copy the mutable attributes of ``record`` onto ``data_pass``; report changes."""

    changed = False
    for attribute in MUTABLE_ATTRIBUTES:
        value = getattr(record, attribute)
        if getattr(data_pass, attribute) != value:
            setattr(data_pass, attribute, value)
            changed = True
    return changed

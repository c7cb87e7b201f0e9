"""Reusable fakes and helpers for data-pass synchronization tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookkeeping.domain.errors import ExternalSourceError, PersistenceError
from bookkeeping.domain.model import DataPass, LhcPeriod
from bookkeeping.domain.ports.fetching import DataPassDetails, DataPassRecord, DataPassSource
from bookkeeping.domain.ports.unit_of_work import BookkeepingRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from types import TracebackType
    from uuid import UUID


def make_record(
    name: str = "LHC23f_apass1",
    *,
    description: str | None = None,
    output_size: int | None = 1024,
    reconstructed_events_count: int | None = 100,
    last_run_number: int | None = 10,
) -> DataPassRecord:
    return DataPassRecord(
        name=name,
        description=description if description is not None else f"{name} production",
        output_size=output_size,
        reconstructed_events_count=reconstructed_events_count,
        last_run_number=last_run_number,
    )


class FakeDataPassSource(DataPassSource):
    """In-memory data-pass source; details are looked up by description."""

    def __init__(
        self,
        records: Iterable[DataPassRecord],
        *,
        runs: Mapping[str, Iterable[int]] | None = None,
        failing_descriptions: Iterable[str] = (),
        listing_error: ExternalSourceError | None = None,
    ) -> None:
        self.records = list(records)
        self.runs = {key: tuple(value) for key, value in (runs or {}).items()}
        self.failing_descriptions = set(failing_descriptions)
        self.listing_error = listing_error
        self.detail_calls: list[str] = []

    def get_data_passes(self) -> list[DataPassRecord]:
        if self.listing_error is not None:
            raise self.listing_error
        return list(self.records)

    def get_data_pass_details(self, description: str) -> DataPassDetails:
        self.detail_calls.append(description)
        if description in self.failing_descriptions:
            raise ExternalSourceError(f"details unavailable for {description}")
        return DataPassDetails(run_numbers=self.runs.get(description, ()))


class FakeLhcPeriodRepository:
    def __init__(self) -> None:
        self.items: dict[str, LhcPeriod] = {}
        self.lookups = 0

    def add(self, entity: LhcPeriod) -> None:
        self.items[entity.name] = entity

    def get_by_name(self, name: str) -> LhcPeriod | None:
        self.lookups += 1
        return self.items.get(name)

    def find_all(self) -> list[LhcPeriod]:
        return sorted(self.items.values(), key=lambda period: period.name)


class FakeDataPassRepository:
    def __init__(self, periods: FakeLhcPeriodRepository) -> None:
        self._periods = periods
        self.items: dict[str, DataPass] = {}
        self.updates: list[str] = []

    def add(self, entity: DataPass) -> None:
        self.items[entity.name] = entity

    def update(self, entity: DataPass) -> None:
        self.items[entity.name] = entity
        self.updates.append(entity.name)

    def get_by_name(self, name: str) -> DataPass | None:
        return self.items.get(name)

    def find_all(self, *, period_name: str | None = None) -> list[DataPass]:
        data_passes = sorted(self.items.values(), key=lambda data_pass: data_pass.name)
        if period_name is None:
            return data_passes
        period = self._periods.items.get(period_name)
        if period is None:
            return []
        return [item for item in data_passes if item.lhc_period_id == period.id]


class FakeDataPassRunRepository:
    def __init__(self) -> None:
        self.links: dict[UUID, list[int]] = {}
        self.add_calls: list[tuple[UUID, list[int]]] = []

    def linked_run_numbers(self, data_pass_id: UUID) -> set[int]:
        return set(self.links.get(data_pass_id, []))

    def add_links(self, data_pass_id: UUID, run_numbers: Iterable[int]) -> int:
        numbers = list(dict.fromkeys(run_numbers))
        self.add_calls.append((data_pass_id, numbers))
        self.links.setdefault(data_pass_id, []).extend(numbers)
        return len(numbers)


class FailingDataPassRepository(FakeDataPassRepository):
    """Data-pass repository whose writes are rejected by the store."""

    def add(self, entity: DataPass) -> None:
        raise PersistenceError(f"cannot store {entity.name}")

    def update(self, entity: DataPass) -> None:
        raise PersistenceError(f"cannot store {entity.name}")


class FakeBookkeepingUnitOfWork:
    """Unit of work over shared in-memory repositories.

    Every instance built from the same ``FakeBookkeepingStore`` sees the same
    data, mirroring separate sessions on one database.
    """

    def __init__(self, store: FakeBookkeepingStore) -> None:
        self._store = store
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> BookkeepingRepositories:
        return self._store.repositories

    def __enter__(self) -> FakeBookkeepingUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True
        self._store.commits += 1

    def rollback(self) -> None:
        self.rolled_back = True


class FakeBookkeepingStore:
    def __init__(self) -> None:
        self.lhc_periods = FakeLhcPeriodRepository()
        self.data_passes: FakeDataPassRepository = FakeDataPassRepository(self.lhc_periods)
        self.data_pass_runs = FakeDataPassRunRepository()
        self.repositories = BookkeepingRepositories(
            lhc_periods=self.lhc_periods,
            data_passes=self.data_passes,
            data_pass_runs=self.data_pass_runs,
        )
        self.commits = 0
        self.units_of_work: list[FakeBookkeepingUnitOfWork] = []

    def unit_of_work(self) -> FakeBookkeepingUnitOfWork:
        uow = FakeBookkeepingUnitOfWork(self)
        self.units_of_work.append(uow)
        return uow

    @classmethod
    def failing(cls) -> FakeBookkeepingStore:
        store = cls()
        store.data_passes = FailingDataPassRepository(store.lhc_periods)
        store.repositories.data_passes = store.data_passes
        return store

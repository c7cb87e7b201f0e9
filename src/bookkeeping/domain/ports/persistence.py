"""Ports for persisting bookkeeping aggregates.

Implementations raise ``PersistenceError`` when the store fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from bookkeeping.domain.model import DataPass, LhcPeriod

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class LhcPeriodRepository(Repository[LhcPeriod], Protocol):
    """Persistence contract for LHC periods."""

    def get_by_name(self, name: str) -> LhcPeriod | None: ...

    def find_all(self) -> Sequence[LhcPeriod]: ...


@runtime_checkable
class DataPassRepository(Repository[DataPass], Protocol):
    """Persistence contract for data passes."""

    def get_by_name(self, name: str) -> DataPass | None: ...

    def update(self, entity: DataPass) -> None: ...

    def find_all(self, *, period_name: str | None = None) -> Sequence[DataPass]: ...


@runtime_checkable
class DataPassRunRepository(Protocol):
    """Persistence contract for the runs linked to data passes."""

    def linked_run_numbers(self, data_pass_id: UUID) -> set[int]: ...

    def add_links(self, data_pass_id: UUID, run_numbers: Iterable[int]) -> int: ...

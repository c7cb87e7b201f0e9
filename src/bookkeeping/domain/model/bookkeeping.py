"""Bookkeeping entities touched by data-pass synchronization.

Ownership:
- LhcPeriod groups data passes (1:n), referenced by id
- DataPass owns its run links (DataPassRun)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bookkeeping.domain.model.entity import Entity

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class LhcPeriod(Entity):
    name: str
    year: int
    period_code: str


@dataclass(eq=False, kw_only=True)
class DataPassRun(Entity):
    data_pass_id: UUID
    run_number: int


@dataclass(eq=False, kw_only=True)
class DataPass(Entity):
    name: str
    lhc_period_id: UUID
    description: str | None = None
    output_size: int | None = None
    reconstructed_events_count: int | None = None
    last_run_number: int | None = None

    _runs: list[DataPassRun] = field(default_factory=list["DataPassRun"], repr=False)

    @property
    def run_numbers(self) -> tuple[int, ...]:
        return tuple(sorted(run.run_number for run in self._runs))

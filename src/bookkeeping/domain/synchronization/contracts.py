"""Outcome and report contracts of a synchronization run.

Each data pass produces one tagged ``DataPassOutcome``; the report is built
from the collected outcomes once the loop is over.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bookkeeping.domain.errors import DatasetDetailFetchError


class ChangeKind(StrEnum):
    """What happened to the data pass row itself."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class OutcomeStatus(StrEnum):
    """Whether the data pass was synchronized including its run links."""

    SYNCHRONIZED = "synchronized"
    DETAILS_FAILED = "details_failed"


@dataclass(slots=True, kw_only=True)
class DataPassOutcome:
    """Result of synchronizing one data pass."""

    name: str
    change: ChangeKind
    status: OutcomeStatus = OutcomeStatus.SYNCHRONIZED
    linked_runs: int = 0
    error: DatasetDetailFetchError | None = None

    def __post_init__(self) -> None:
        if self.status is OutcomeStatus.DETAILS_FAILED and self.error is None:
            raise ValueError("Failed outcome must carry its error")


@dataclass(slots=True, kw_only=True)
class SynchronizationReport:
    """Aggregate result of one synchronization run."""

    processed: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    linked_runs: int = 0
    failed_detail_fetches: list[str] = field(default_factory=list[str])
    skipped: list[str] = field(default_factory=list[str])
    cancelled: bool = False

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Iterable[DataPassOutcome],
        *,
        skipped: Iterable[str] = (),
        cancelled: bool = False,
    ) -> SynchronizationReport:
        report = cls(skipped=list(skipped), cancelled=cancelled)
        for outcome in outcomes:
            report.processed += 1
            report.linked_runs += outcome.linked_runs
            if outcome.change is ChangeKind.CREATED:
                report.created += 1
            elif outcome.change is ChangeKind.UPDATED:
                report.updated += 1
            else:
                report.unchanged += 1
            if outcome.status is OutcomeStatus.DETAILS_FAILED:
                report.failed_detail_fetches.append(outcome.name)
        return report

    @property
    def fully_synchronized(self) -> int:
        return self.processed - len(self.failed_detail_fetches)

"""Ports for fetching data passes from an external provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class DataPassRecord:
    """Data pass as listed by the external provider."""

    name: str
    description: str
    output_size: int | None = None
    reconstructed_events_count: int | None = None
    last_run_number: int | None = None


@dataclass(frozen=True, slots=True)
class DataPassDetails:
    """Detail response of one data pass."""

    run_numbers: tuple[int, ...] = field(default_factory=tuple)


@runtime_checkable
class DataPassSource(Protocol):
    """Authoritative source of data passes.

    Both calls raise ``ExternalSourceError`` when the provider cannot be read.
    """

    def get_data_passes(self) -> Sequence[DataPassRecord]: ...

    def get_data_pass_details(self, description: str) -> DataPassDetails: ...


__all__ = ["DataPassDetails", "DataPassRecord", "DataPassSource"]

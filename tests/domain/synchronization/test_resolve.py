from __future__ import annotations

import pytest

from bookkeeping.domain.lhc_periods import LhcPeriodParseError
from bookkeeping.domain.model import LhcPeriod
from bookkeeping.domain.synchronization import LhcPeriodResolver
from tests.helpers.data_passes import FakeBookkeepingStore


def test_resolve_creates_missing_period() -> None:
    store = FakeBookkeepingStore()
    resolver = LhcPeriodResolver(store.unit_of_work)

    period = resolver.resolve("LHC23f")

    assert period.name == "LHC23f"
    assert period.year == 2023
    assert period.period_code == "f"
    assert store.lhc_periods.items == {"LHC23f": period}
    assert store.commits == 1


def test_resolve_reuses_existing_period_without_commit() -> None:
    store = FakeBookkeepingStore()
    existing = LhcPeriod(name="LHC23f", year=2023, period_code="f")
    store.lhc_periods.add(existing)
    resolver = LhcPeriodResolver(store.unit_of_work)

    assert resolver.resolve("LHC23f") is existing
    assert store.commits == 0


def test_resolve_memoises_within_one_run() -> None:
    store = FakeBookkeepingStore()
    resolver = LhcPeriodResolver(store.unit_of_work)

    first = resolver.resolve("LHC24a")
    second = resolver.resolve("LHC24a")

    assert first is second
    assert store.lhc_periods.lookups == 1
    assert len(store.units_of_work) == 1
    assert resolver.resolved == ("LHC24a",)


def test_resolve_rejects_malformed_period_name() -> None:
    store = FakeBookkeepingStore()
    resolver = LhcPeriodResolver(store.unit_of_work)

    with pytest.raises(LhcPeriodParseError):
        resolver.resolve("scratch")

    assert store.lhc_periods.items == {}
    assert resolver.resolved == ()

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from bookkeeping.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from bookkeeping.domain.errors import PersistenceError
from bookkeeping.domain.model import DataPass, LhcPeriod

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    assert is_started() is False
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_migrates_schema(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    tables = set(inspect(sqlite_engine).get_table_names())

    assert {"lhc_period", "data_pass", "data_pass_run", "alembic_version"} <= tables


def test_unit_of_work_commits_across_sessions(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    period = LhcPeriod(name="LHC23f", year=2023, period_code="f")

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.lhc_periods.add(period)
        uow.repositories.data_passes.add(
            DataPass(name="LHC23f_apass1", lhc_period_id=period.id, description="apass1")
        )
        uow.commit()

    # attributes stay readable on the detached instance
    assert period.name == "LHC23f"

    with SqlAlchemyUnitOfWork() as uow:
        stored = uow.repositories.data_passes.get_by_name("LHC23f_apass1")
        assert stored is not None
        assert stored.lhc_period_id == period.id


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.lhc_periods.add(LhcPeriod(name="LHC24a", year=2024, period_code="a"))
        raise RuntimeError("abort")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.lhc_periods.get_by_name("LHC24a") is None


def test_unit_of_work_reports_integrity_failures(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.lhc_periods.add(LhcPeriod(name="LHC24a", year=2024, period_code="a"))
        uow.commit()

    with pytest.raises(PersistenceError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.lhc_periods.add(LhcPeriod(name="LHC24a", year=2024, period_code="a"))


def test_repositories_require_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories

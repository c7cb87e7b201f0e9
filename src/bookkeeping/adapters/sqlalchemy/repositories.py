"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Concatenate, cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from bookkeeping.adapters.sqlalchemy.mappings import (
    data_pass_run_table,
    data_pass_table,
    lhc_period_table,
)
from bookkeeping.domain.errors import PersistenceError
from bookkeeping.domain.model import DataPass, DataPassRun, LhcPeriod

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable, Iterable

    from sqlalchemy.orm import InstrumentedAttribute, Session


def translate_errors[S, **P, T](
    func: Callable[Concatenate[S, P], T],
) -> Callable[Concatenate[S, P], T]:
    """Re-raise SQLAlchemy failures as the domain ``PersistenceError``."""

    @functools.wraps(func)
    def wrapper(self: S, *args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"{func.__qualname__} failed: {exc}") from exc

    return wrapper


class SqlAlchemyLhcPeriodRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: LhcPeriod) -> None:
        self.session.add(entity)
        self.session.flush()

    @translate_errors
    def get_by_name(self, name: str) -> LhcPeriod | None:
        stmt = select(LhcPeriod).where(lhc_period_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    @translate_errors
    def find_all(self) -> list[LhcPeriod]:
        stmt = select(LhcPeriod).order_by(lhc_period_table.c.name)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyDataPassRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def add(self, entity: DataPass) -> None:
        self.session.add(entity)
        self.session.flush()

    @translate_errors
    def update(self, entity: DataPass) -> None:
        self.session.add(entity)
        self.session.flush()

    @translate_errors
    def get_by_name(self, name: str) -> DataPass | None:
        stmt = select(DataPass).where(data_pass_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    @translate_errors
    def find_all(self, *, period_name: str | None = None) -> list[DataPass]:
        runs = cast("InstrumentedAttribute[list[DataPassRun]]", DataPass._runs)  # noqa: SLF001
        stmt = select(DataPass).options(selectinload(runs))
        if period_name is not None:
            stmt = stmt.join(
                lhc_period_table, lhc_period_table.c.id == data_pass_table.c.lhc_period_id
            ).where(lhc_period_table.c.name == period_name)
        stmt = stmt.order_by(data_pass_table.c.name)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyDataPassRunRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_errors
    def linked_run_numbers(self, data_pass_id: uuid.UUID) -> set[int]:
        stmt = select(data_pass_run_table.c.run_number).where(
            data_pass_run_table.c.data_pass_id == data_pass_id
        )
        return set(self.session.execute(stmt).scalars())

    @translate_errors
    def add_links(self, data_pass_id: uuid.UUID, run_numbers: Iterable[int]) -> int:
        links = [
            DataPassRun(data_pass_id=data_pass_id, run_number=run_number)
            for run_number in dict.fromkeys(run_numbers)
        ]
        self.session.add_all(links)
        self.session.flush()
        return len(links)


if TYPE_CHECKING:
    from bookkeeping.domain.ports.persistence import (
        DataPassRepository,
        DataPassRunRepository,
        LhcPeriodRepository,
    )

    _session_stub = cast("Session", object())
    _period_repo: LhcPeriodRepository = SqlAlchemyLhcPeriodRepository(_session_stub)
    _data_pass_repo: DataPassRepository = SqlAlchemyDataPassRepository(_session_stub)
    _run_repo: DataPassRunRepository = SqlAlchemyDataPassRunRepository(_session_stub)

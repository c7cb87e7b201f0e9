"""SQLAlchemy mapping metadata for the bookkeeping domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from bookkeeping.domain.model import DataPass, DataPassRun, LhcPeriod

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

lhc_period_table = Table(
    "lhc_period",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column("year", Integer, nullable=False),
    Column("period_code", String, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
)

data_pass_table = Table(
    "data_pass",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column(
        "lhc_period_id",
        UUIDColumnType,
        ForeignKey("lhc_period.id"),
        nullable=False,
        index=True,
    ),
    Column("description", String, nullable=True),
    Column("output_size", BigInteger, nullable=True),
    Column("reconstructed_events_count", BigInteger, nullable=True),
    Column("last_run_number", Integer, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)

data_pass_run_table = Table(
    "data_pass_run",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "data_pass_id",
        UUIDColumnType,
        ForeignKey("data_pass.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("run_number", Integer, nullable=False, index=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    UniqueConstraint("data_pass_id", "run_number", name="uq_data_pass_run_link"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(LhcPeriod, lhc_period_table)

    mapper_registry.map_imperatively(
        DataPass,
        data_pass_table,
        properties={
            "_runs": relationship(
                DataPassRun,
                order_by=data_pass_run_table.c.run_number,
                viewonly=True,
            ),
        },
    )

    mapper_registry.map_imperatively(DataPassRun, data_pass_run_table)

    configure_mappers()
    return mapper_registry

"""Create LHC period, data pass and data pass run tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from bookkeeping.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "lhc_period",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("period_code", sa.String(), nullable=False),
        sa.Column("created_at", UTCDateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_lhc_period")),
        sa.UniqueConstraint("name", name=op.f("uq_lhc_period_name")),
    )
    op.create_table(
        "data_pass",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("lhc_period_id", sa.Uuid(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("output_size", sa.BigInteger(), nullable=True),
        sa.Column("reconstructed_events_count", sa.BigInteger(), nullable=True),
        sa.Column("last_run_number", sa.Integer(), nullable=True),
        sa.Column("created_at", UTCDateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ["lhc_period_id"],
            ["lhc_period.id"],
            name=op.f("fk_data_pass_lhc_period_id_lhc_period"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_data_pass")),
        sa.UniqueConstraint("name", name=op.f("uq_data_pass_name")),
    )
    op.create_index(op.f("ix_data_pass_lhc_period_id"), "data_pass", ["lhc_period_id"])
    op.create_table(
        "data_pass_run",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("data_pass_id", sa.Uuid(), nullable=False),
        sa.Column("run_number", sa.Integer(), nullable=False),
        sa.Column("created_at", UTCDateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ["data_pass_id"],
            ["data_pass.id"],
            name=op.f("fk_data_pass_run_data_pass_id_data_pass"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_data_pass_run")),
        sa.UniqueConstraint("data_pass_id", "run_number", name="uq_data_pass_run_link"),
    )
    op.create_index(op.f("ix_data_pass_run_run_number"), "data_pass_run", ["run_number"])


def downgrade() -> None:
    op.drop_index(op.f("ix_data_pass_run_run_number"), table_name="data_pass_run")
    op.drop_table("data_pass_run")
    op.drop_index(op.f("ix_data_pass_lhc_period_id"), table_name="data_pass")
    op.drop_table("data_pass")
    op.drop_table("lhc_period")

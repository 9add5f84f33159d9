"""Bench records table.

Revision ID: 20251019100000
Revises: 20251019000000
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20251019100000"
down_revision: Union[str, None] = "20251019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bench_records",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("timestamp", sa.String(length=64), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("date_logged", sa.DateTime(timezone=False), nullable=True),
        sa.Column("logged_by", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("accuracy", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "tags",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("user_agent", sa.String(length=1024), nullable=False, server_default="Unknown"),
        sa.Column("ip_address", sa.String(length=255), nullable=False, server_default="Unknown"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_bench_records_created_at"),
        "bench_records",
        ["created_at"],
        unique=False,
    )
    op.create_index(
        op.f("ix_bench_records_logged_by"),
        "bench_records",
        ["logged_by"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_bench_records_logged_by"), table_name="bench_records")
    op.drop_index(op.f("ix_bench_records_created_at"), table_name="bench_records")
    op.drop_table("bench_records")

"""create cities table

Revision ID: 0001
Revises:
Create Date: 2026-02-21 23:33:18
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from citycalc.core.config import settings

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_slug", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("params", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cities")),
        schema=settings.database_schema,
    )
    op.create_index(
        op.f("ix_cities_project_slug"),
        "cities",
        ["project_slug"],
        unique=False,
        schema=settings.database_schema,
    )


def downgrade() -> None:
    op.drop_index(
        op.f("ix_cities_project_slug"),
        table_name="cities",
        schema=settings.database_schema,
    )
    op.drop_table("cities", schema=settings.database_schema)

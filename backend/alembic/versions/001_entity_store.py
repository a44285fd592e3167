"""Entity store — entities, entity_versions, index_rows.

Revision ID: 001_entity_store
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_entity_store"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _key(length: int) -> sa.String:
    return sa.String(length, collation="C")


def upgrade() -> None:
    op.create_table(
        "entities",
        sa.Column("entity_type", sa.String(32), primary_key=True),
        sa.Column("id", _key(32), primary_key=True),
        sa.Column("version_id", _key(32), nullable=False),
        sa.Column("label", sa.Text, nullable=False, server_default=""),
        sa.Column("body", sa.JSON, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "entity_versions",
        sa.Column("entity_type", sa.String(32), primary_key=True),
        sa.Column("id", _key(32), primary_key=True),
        sa.Column("version_id", _key(32), primary_key=True),
        sa.Column("body", sa.JSON, nullable=False),
    )

    op.create_table(
        "index_rows",
        sa.Column("row_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("entity_type", sa.String(32), nullable=False),
        sa.Column("row_name", sa.String(64), nullable=False),
        sa.Column("part_key", _key(256), nullable=False),
        sa.Column("sort_key", _key(32), nullable=False),
        sa.Column("part_label", sa.Text, nullable=False, server_default=""),
        sa.Column("text_value", sa.Text, nullable=False, server_default=""),
        sa.Column("body", sa.JSON, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "entity_type", "row_name", "part_key", "sort_key",
            name="uq_index_rows_key",
        ),
    )
    op.create_index(
        "ix_index_rows_partition", "index_rows",
        ["entity_type", "row_name", "part_key"],
    )


def downgrade() -> None:
    op.drop_index("ix_index_rows_partition", table_name="index_rows")
    op.drop_table("index_rows")
    op.drop_table("entity_versions")
    op.drop_table("entities")

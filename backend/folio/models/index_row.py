"""Index Row ORM — one secondary-index entry per (index, partition key, entity).

Invariants:
    - (entity_type, row_name, part_key, sort_key) is unique; sort_key is the entity ID
    - Rows are rewritten whenever their entity is written, and removed with it
    - text_value carries the entity's display text; part_label labels the partition
      key itself (org name for an org ID, email for a user ID)

Design Decisions:
    - Denormalized body per row: filtered body listings read one partition,
      no join back to entities
    - Bytewise key ordering on PostgreSQL so key order equals TUID order
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, JSON, Integer, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import PART_KEY_LENGTH, Base, key_string


class IndexRow(Base):
    __tablename__ = "index_rows"
    __table_args__ = (
        UniqueConstraint(
            "entity_type", "row_name", "part_key", "sort_key",
            name="uq_index_rows_key",
        ),
        Index("ix_index_rows_partition", "entity_type", "row_name", "part_key"),
    )

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    row_name: Mapped[str] = mapped_column(String(64), nullable=False)
    part_key: Mapped[str] = mapped_column(key_string(PART_KEY_LENGTH), nullable=False)
    sort_key: Mapped[str] = mapped_column(key_string(32), nullable=False)
    part_label: Mapped[str] = mapped_column(Text, nullable=False, default="")
    text_value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[dict] = mapped_column(JSON, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

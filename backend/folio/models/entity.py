"""Entity ORM — the current version of every stored entity, one row per (type, id).

Invariants:
    - (entity_type, id) is the primary key; id is a TUID
    - version_id equals id for unversioned kinds
    - label is the display text of the whole-entity index (title, name, agent, ...)
    - expires_at NULL means the entity never expires; expired rows are invisible to reads

Design Decisions:
    - One polymorphic table keyed by entity_type over one table per kind: every kind
      shares the same read/write/index paths (ADR: one generic listing engine)
    - JSON body column: entities are stored as their pydantic wire representation
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base, key_string


class EntityRow(Base):
    __tablename__ = "entities"

    entity_type: Mapped[str] = mapped_column(String(32), primary_key=True)
    id: Mapped[str] = mapped_column(key_string(32), primary_key=True)
    version_id: Mapped[str] = mapped_column(key_string(32), nullable=False)
    label: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[dict] = mapped_column(JSON, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

"""Entity Version ORM — full version history of versioned entity kinds.

Invariants:
    - (entity_type, id, version_id) is the primary key; version_id is a TUID
    - The newest version row always matches the entities row body
"""

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base, key_string


class EntityVersionRow(Base):
    __tablename__ = "entity_versions"

    entity_type: Mapped[str] = mapped_column(String(32), primary_key=True)
    id: Mapped[str] = mapped_column(key_string(32), primary_key=True)
    version_id: Mapped[str] = mapped_column(key_string(32), primary_key=True)
    body: Mapped[dict] = mapped_column(JSON, nullable=False)

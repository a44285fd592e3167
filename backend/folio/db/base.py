"""SQLAlchemy Declarative Base — shared base class for all ORM models."""

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase

PART_KEY_LENGTH = 256


def key_string(length: int = 128) -> String:
    """String column for keys compared and ordered bytewise ("C" collation on PostgreSQL)."""
    return String(length).with_variant(String(length, collation="C"), "postgresql")


class Base(DeclarativeBase):
    """Base class for all Folio ORM models."""
    pass

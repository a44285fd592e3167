"""Table Specs — declarative description of an entity kind's storage and indexes.

Invariants:
    - An IndexSpec maps one entity to zero or more partition keys; empty keys are skipped
    - text_value is the entity's display text inside that index
    - part_label labels the partition key itself (e.g. org name for an org ID)
    - IndexAccessor.fetch set ⇒ the accessor yields entity IDs that must be expanded

Design Decisions:
    - Callables over subclass hooks: each kind is a data declaration, not a class
      hierarchy (ADR: one generic table, one generic listing engine)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Generic, Iterable, TypeVar

from pydantic import BaseModel

from folio.core.cursor import Page
from folio.db.base import PART_KEY_LENGTH

M = TypeVar("M", bound=BaseModel)


def _blank(entity: Any) -> str:
    return ""


def _never(entity: Any) -> datetime | None:
    return None


@dataclass(frozen=True)
class IndexSpec(Generic[M]):
    name: str
    keys: Callable[[M], Iterable[str]]
    text_value: Callable[[M], str] = _blank
    part_label: Callable[[M], str] = _blank


@dataclass(frozen=True)
class TableSpec(Generic[M]):
    entity_type: str
    model: type[M]
    label: Callable[[M], str]
    indexes: tuple[IndexSpec[M], ...] = ()
    versioned: bool = True
    expires_at: Callable[[M], datetime | None] = _never

    def index(self, name: str) -> IndexSpec[M]:
        for spec in self.indexes:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.entity_type} has no index {name!r}")

    def oversized_keys(self, entity: M) -> list[str]:
        """Partition keys of this entity too long for the index table."""
        return [
            f"{index.name} {key[:32]!r}... exceeds {PART_KEY_LENGTH} characters"
            for index in self.indexes
            for key in index.keys(entity)
            if key and len(key) > PART_KEY_LENGTH
        ]


@dataclass(frozen=True)
class IndexAccessor:
    """Read access to one index partition: one page, or everything in store order."""
    page: Callable[[Page], Awaitable[list]]
    all: Callable[[], Awaitable[list]]
    fetch: Callable[[str], Awaitable[Any]] | None = None

    @property
    def yields_ids(self) -> bool:
        return self.fetch is not None

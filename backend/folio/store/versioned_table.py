"""Versioned Table — SQL-backed store for one entity kind: entities, versions, indexes.

Invariants:
    - Every public operation opens its own session (safe under concurrent fan-out)
    - Pages are exclusive of their offset: forward reads key > offset ascending,
      reversed reads key < offset descending; sentinel offsets are unbounded
    - page=None reads the whole partition in ascending key order
    - Expired entities and index rows are invisible to every read
    - Index rows of an entity are replaced atomically with each write

Design Decisions:
    - Partition + sort key model over per-kind tables: indexes are data (TableSpec),
      so adding a filter never needs a migration
    - Accessor factories return IndexAccessor closures: the listing layer never
      sees SQL, only page/all callables
"""

import logging
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Generic

from sqlalchemy import Select, delete, func, or_, select

from folio.core.cursor import Page
from folio.core.domain_types import TextValue
from folio.core.errors import NotFoundError
from folio.infrastructure.database import DatabaseSessionManager
from folio.models.entity import EntityRow
from folio.models.entity_version import EntityVersionRow
from folio.models.index_row import IndexRow
from folio.store.table import IndexAccessor, M, TableSpec

logger = logging.getLogger(__name__)


def _paged(stmt: Select, column, page: Page | None) -> Select:
    if page is None:
        return stmt.order_by(column)
    if page.reverse:
        if page.bounded:
            stmt = stmt.where(column < page.offset)
        stmt = stmt.order_by(column.desc())
    else:
        if page.bounded:
            stmt = stmt.where(column > page.offset)
        stmt = stmt.order_by(column)
    if page.limit is not None:
        stmt = stmt.limit(page.limit)
    return stmt


def _live(column):
    return or_(column.is_(None), column > datetime.now(timezone.utc))


class VersionedTable(Generic[M]):
    """Versioned entity storage with secondary indexes for one TableSpec."""

    def __init__(self, db: DatabaseSessionManager, spec: TableSpec[M]):
        self._db = db
        self.spec = spec

    @property
    def entity_type(self) -> str:
        return self.spec.entity_type

    def _load(self, body: dict) -> M:
        return self.spec.model.model_validate(body)

    # ─── Writes ──────────────────────────────────────────────────

    async def write(self, entity: M) -> M:
        """Insert a new entity (and its first version and index rows)."""
        async with self._db.session(self.entity_type, entity.id) as s:
            s.add(self._entity_row(entity))
            self._add_version(s, entity)
            await self._reindex(s, entity)
            await s.commit()
        logger.debug(
            f"Wrote {self.entity_type} {entity.id}",
            extra={"entity_type": self.entity_type, "entity_id": entity.id},
        )
        return entity

    async def update(self, entity: M) -> M:
        """Replace the current version; versioned kinds keep the old one in history."""
        async with self._db.session(self.entity_type, entity.id) as s:
            await s.merge(self._entity_row(entity))
            self._add_version(s, entity)
            await self._reindex(s, entity)
            await s.commit()
        return entity

    async def delete(self, entity_id: str) -> M:
        """Delete an entity with all its versions and index rows. Returns the last body."""
        async with self._db.session(self.entity_type, entity_id) as s:
            row = await s.get(EntityRow, (self.entity_type, entity_id))
            if row is None:
                raise NotFoundError(self.entity_type, entity_id)
            entity = self._load(row.body)
            await s.execute(
                delete(EntityVersionRow).where(
                    EntityVersionRow.entity_type == self.entity_type,
                    EntityVersionRow.id == entity_id,
                ),
            )
            await self._clear_index(s, entity_id)
            await s.delete(row)
            await s.commit()
        return entity

    async def delete_version(self, entity_id: str, version_id: str) -> M:
        """Delete one version. Deleting the current version restores the previous
        one; deleting the only version deletes the entity."""
        async with self._db.session(self.entity_type, entity_id) as s:
            vrow = await s.get(
                EntityVersionRow, (self.entity_type, entity_id, version_id),
            )
            if vrow is None:
                raise NotFoundError(self.entity_type, f"{entity_id}/{version_id}")
            deleted = self._load(vrow.body)
            await s.delete(vrow)
            await s.flush()

            current = await s.get(EntityRow, (self.entity_type, entity_id))
            if current is not None and current.version_id == version_id:
                result = await s.execute(
                    select(EntityVersionRow.body)
                    .where(
                        EntityVersionRow.entity_type == self.entity_type,
                        EntityVersionRow.id == entity_id,
                    )
                    .order_by(EntityVersionRow.version_id.desc())
                    .limit(1),
                )
                previous = result.scalar_one_or_none()
                if previous is None:
                    await self._clear_index(s, entity_id)
                    await s.delete(current)
                else:
                    restored = self._load(previous)
                    await s.merge(self._entity_row(restored))
                    await self._reindex(s, restored)
            await s.commit()
        return deleted

    def _entity_row(self, entity: M) -> EntityRow:
        return EntityRow(
            entity_type=self.entity_type,
            id=entity.id,
            version_id=getattr(entity, "version_id", "") or entity.id,
            label=self.spec.label(entity),
            body=entity.model_dump(mode="json", by_alias=True),
            expires_at=self.spec.expires_at(entity),
        )

    def _add_version(self, s, entity: M) -> None:
        if self.spec.versioned:
            s.add(EntityVersionRow(
                entity_type=self.entity_type,
                id=entity.id,
                version_id=entity.version_id,
                body=entity.model_dump(mode="json", by_alias=True),
            ))

    async def _clear_index(self, s, entity_id: str) -> None:
        await s.execute(
            delete(IndexRow).where(
                IndexRow.entity_type == self.entity_type,
                IndexRow.sort_key == entity_id,
            ),
        )

    async def _reindex(self, s, entity: M) -> None:
        await self._clear_index(s, entity.id)
        body = entity.model_dump(mode="json", by_alias=True)
        expires_at = self.spec.expires_at(entity)
        for index in self.spec.indexes:
            keys = dict.fromkeys(k for k in index.keys(entity) if k)
            for key in keys:
                s.add(IndexRow(
                    entity_type=self.entity_type,
                    row_name=index.name,
                    part_key=key,
                    sort_key=entity.id,
                    part_label=index.part_label(entity),
                    text_value=index.text_value(entity),
                    body=body,
                    expires_at=expires_at,
                ))

    # ─── Entity Reads ────────────────────────────────────────────

    async def _scalars(self, stmt: Select, entity_id: str | None = None) -> list:
        async with self._db.session(self.entity_type, entity_id) as s:
            result = await s.execute(stmt)
            return list(result.scalars().all())

    async def _rows(self, stmt: Select) -> list:
        async with self._db.session(self.entity_type) as s:
            result = await s.execute(stmt)
            return list(result.all())

    def _entity_stmt(self, *columns) -> Select:
        return select(*columns).where(
            EntityRow.entity_type == self.entity_type,
            _live(EntityRow.expires_at),
        )

    async def read(self, entity_id: str) -> M:
        """Current version of an entity. Raises NotFoundError (missing or expired)."""
        bodies = await self._scalars(
            self._entity_stmt(EntityRow.body).where(EntityRow.id == entity_id),
            entity_id,
        )
        if not bodies:
            raise NotFoundError(self.entity_type, entity_id)
        return self._load(bodies[0])

    async def exists(self, entity_id: str) -> bool:
        ids = await self._scalars(
            self._entity_stmt(EntityRow.id).where(EntityRow.id == entity_id),
            entity_id,
        )
        return bool(ids)

    async def read_entity_ids(self, page: Page | None = None) -> list[str]:
        return await self._scalars(
            _paged(self._entity_stmt(EntityRow.id), EntityRow.id, page),
        )

    async def read_entity_labels(self, page: Page | None = None) -> list[TextValue]:
        rows = await self._rows(
            _paged(self._entity_stmt(EntityRow.id, EntityRow.label), EntityRow.id, page),
        )
        return [TextValue(id=r.id, value=r.label) for r in rows]

    # ─── Version Reads ───────────────────────────────────────────

    def _version_stmt(self, entity_id: str, *columns) -> Select:
        return select(*columns).where(
            EntityVersionRow.entity_type == self.entity_type,
            EntityVersionRow.id == entity_id,
        )

    async def read_version(self, entity_id: str, version_id: str) -> M:
        bodies = await self._scalars(
            self._version_stmt(entity_id, EntityVersionRow.body)
            .where(EntityVersionRow.version_id == version_id),
            entity_id,
        )
        if not bodies:
            raise NotFoundError(self.entity_type, f"{entity_id}/{version_id}")
        return self._load(bodies[0])

    async def version_exists(self, entity_id: str, version_id: str) -> bool:
        ids = await self._scalars(
            self._version_stmt(entity_id, EntityVersionRow.version_id)
            .where(EntityVersionRow.version_id == version_id),
            entity_id,
        )
        return bool(ids)

    async def read_versions(self, entity_id: str, page: Page | None = None) -> list[M]:
        bodies = await self._scalars(
            _paged(
                self._version_stmt(entity_id, EntityVersionRow.body),
                EntityVersionRow.version_id, page,
            ),
            entity_id,
        )
        return [self._load(b) for b in bodies]

    # ─── Index Reads ─────────────────────────────────────────────

    def _index_stmt(self, row: str, *columns) -> Select:
        return select(*columns).where(
            IndexRow.entity_type == self.entity_type,
            IndexRow.row_name == row,
            _live(IndexRow.expires_at),
        )

    async def read_index_ids(
        self, row: str, key: str, page: Page | None = None,
    ) -> list[str]:
        stmt = self._index_stmt(row, IndexRow.sort_key).where(IndexRow.part_key == key)
        return await self._scalars(_paged(stmt, IndexRow.sort_key, page))

    async def read_index_bodies(
        self, row: str, key: str, page: Page | None = None,
    ) -> list[M]:
        stmt = self._index_stmt(row, IndexRow.body).where(IndexRow.part_key == key)
        bodies = await self._scalars(_paged(stmt, IndexRow.sort_key, page))
        return [self._load(b) for b in bodies]

    async def read_index_text_values(
        self, row: str, key: str, page: Page | None = None,
    ) -> list[TextValue]:
        stmt = self._index_stmt(
            row, IndexRow.sort_key, IndexRow.text_value,
        ).where(IndexRow.part_key == key)
        rows = await self._rows(_paged(stmt, IndexRow.sort_key, page))
        return [TextValue(id=r.sort_key, value=r.text_value) for r in rows]

    async def read_part_keys(self, row: str, page: Page | None = None) -> list[str]:
        """Distinct partition keys of an index (e.g. every tag in use)."""
        stmt = self._index_stmt(row, IndexRow.part_key).group_by(IndexRow.part_key)
        return await self._scalars(_paged(stmt, IndexRow.part_key, page))

    async def read_part_labels(
        self, row: str, page: Page | None = None,
    ) -> list[TextValue]:
        """Distinct partition keys paired with their labels (e.g. org ID → org name)."""
        stmt = self._index_stmt(
            row, IndexRow.part_key, func.max(IndexRow.part_label).label("part_label"),
        ).group_by(IndexRow.part_key)
        rows = await self._rows(_paged(stmt, IndexRow.part_key, page))
        return [TextValue(id=r.part_key, value=r.part_label) for r in rows]

    # ─── Accessors ───────────────────────────────────────────────

    def entity_ids(self) -> IndexAccessor:
        """Whole-kind primary index; IDs are expanded to bodies via read()."""
        return IndexAccessor(
            page=self.read_entity_ids, all=self.read_entity_ids, fetch=self.read,
        )

    def entity_labels(self) -> IndexAccessor:
        return IndexAccessor(page=self.read_entity_labels, all=self.read_entity_labels)

    def part_keys(self, row: str) -> IndexAccessor:
        self.spec.index(row)
        read = partial(self.read_part_keys, row)
        return IndexAccessor(page=read, all=read)

    def part_labels(self, row: str) -> IndexAccessor:
        self.spec.index(row)
        read = partial(self.read_part_labels, row)
        return IndexAccessor(page=read, all=read)

    def index_bodies(self, row: str) -> Callable[[str], IndexAccessor]:
        return self._keyed(row, self.read_index_bodies)

    def index_text_values(self, row: str) -> Callable[[str], IndexAccessor]:
        return self._keyed(row, self.read_index_text_values)

    def _keyed(self, row: str, reader) -> Callable[[str], IndexAccessor]:
        self.spec.index(row)

        def accessor(key: str) -> IndexAccessor:
            read = partial(reader, row, key)
            return IndexAccessor(page=read, all=read)

        return accessor

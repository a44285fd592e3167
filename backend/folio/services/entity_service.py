"""Entity Service — generic create/read/update/delete, version history, and listings.

Invariants:
    - create assigns id, created_at (and version_id, updated_at when versioned)
      from one fresh TUID; created_at is the TUID's timestamp
    - update keeps id and created_at from the stored entity and assigns a new version
    - A body ID that disagrees with the path ID is a 400, never silently overwritten
    - Semantic problems found after ID assignment raise UnprocessableEntityError (422),
      including index keys longer than the index table allows
    - Listings run through the shared ListingEngine; each kind only declares them

Design Decisions:
    - Hook methods (prepare/problems/conflicts) over per-kind CRUD copies:
      subclasses describe their rules, the base class owns the flow
    - Listing table built once in __init__: listing(name, ...) is a dict lookup
"""

import logging
from functools import partial
from typing import Generic, Mapping

from folio.core import tuid
from folio.core.errors import NotFoundError, UnprocessableEntityError, ValidationError
from folio.services.listing import (
    ListingBuilder, ListingEngine, ListingParams, ListingSpec, ResultShape,
)
from folio.store.table import IndexAccessor, M
from folio.store.versioned_table import VersionedTable

logger = logging.getLogger(__name__)


class EntityService(Generic[M]):
    """CRUD and listing operations for one entity kind."""

    def __init__(self, table: VersionedTable[M], engine: ListingEngine):
        self.table = table
        self.engine = engine
        self.listings: dict[str, ListingSpec] = {
            spec.name: spec for spec in self.define_listings()
        }

    @property
    def entity_type(self) -> str:
        return self.table.entity_type

    # ─── Hooks ───────────────────────────────────────────────────

    def define_listings(self) -> list[ListingSpec]:
        return []

    def present(self, entity: M):
        """Client-facing representation of a stored entity."""
        return entity

    async def prepare(self, entity: M) -> M:
        """Derive computed fields before validation."""
        return entity

    def problems(self, entity: M) -> list[str]:
        """Semantic validation of a fully stamped entity."""
        return []

    async def conflicts(self, entity: M) -> list[str]:
        """Validation that needs the store (uniqueness and references)."""
        return []

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, entity: M) -> M:
        entity_id = tuid.new_id()
        stamp = {"id": entity_id, "created_at": tuid.info(entity_id).timestamp}
        if self.table.spec.versioned:
            stamp |= {"version_id": entity_id, "updated_at": stamp["created_at"]}
        entity = await self._checked(entity.model_copy(update=stamp))
        await self.table.write(entity)
        logger.info(
            f"Created {self.entity_type} {entity.id}",
            extra={"entity_type": self.entity_type, "entity_id": entity.id},
        )
        return entity

    async def update(self, entity_id: str, entity: M) -> M:
        if entity.id and entity.id != entity_id:
            raise ValidationError(
                f"body id {entity.id!r} does not match path id {entity_id!r}", "id",
            )
        existing = await self.table.read(entity_id)
        version_id = tuid.new_id()
        entity = await self._checked(entity.model_copy(update={
            "id": existing.id,
            "created_at": existing.created_at,
            "version_id": version_id,
            "updated_at": tuid.info(version_id).timestamp,
        }))
        await self.table.update(entity)
        logger.info(
            f"Updated {self.entity_type} {entity_id}",
            extra={"entity_type": self.entity_type, "entity_id": entity_id},
        )
        return entity

    async def _checked(self, entity: M) -> M:
        entity = await self.prepare(entity)
        found = (
            self.problems(entity)
            + self.table.spec.oversized_keys(entity)
            + await self.conflicts(entity)
        )
        if found:
            raise UnprocessableEntityError(self.entity_type, found)
        return entity

    async def delete(self, entity_id: str) -> M:
        return await self.table.delete(entity_id)

    async def delete_version(self, entity_id: str, version_id: str) -> M:
        return await self.table.delete_version(entity_id, version_id)

    # ─── Reads ───────────────────────────────────────────────────

    async def read(self, entity_id: str) -> M:
        return await self.table.read(entity_id)

    async def exists(self, entity_id: str) -> bool:
        return await self.table.exists(entity_id)

    async def read_version(self, entity_id: str, version_id: str) -> M:
        return await self.table.read_version(entity_id, version_id)

    async def version_exists(self, entity_id: str, version_id: str) -> bool:
        return await self.table.version_exists(entity_id, version_id)

    async def versions(self, entity_id: str, params: ListingParams) -> list:
        """Paged version history; 404 when the entity has never existed."""
        read = partial(self.table.read_versions, entity_id)
        spec = (
            ListingBuilder(f"{self.entity_type.lower()}_versions", ResultShape.BODIES)
            .otherwise(IndexAccessor(page=read, all=read))
            .present(self.present)
            .build()
        )
        found = await self.engine.run(spec, params)
        if not found and not await self.table.exists(entity_id):
            raise NotFoundError(self.entity_type, entity_id)
        return found

    async def listing(
        self, name: str, params: ListingParams, filters: Mapping[str, str | None] | None = None,
    ) -> list:
        return await self.engine.run(self.listings[name], params, filters)

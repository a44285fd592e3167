"""User Service — versioned user accounts with hashed passwords.

Indexes (display text "Given Family <email>"):
    - email: standardized address; at most one live user per address
    - org: organization ID, labeled with the organization name
    - role: one partition per role
    - status: PENDING, ENABLED, DISABLED

Invariants:
    - Clear-text passwords are hashed in prepare(), on a worker thread, and never stored
    - A client-supplied password_hash is ignored; updates without a password
      keep the stored hash
    - present() scrubs password fields from every response
"""

import asyncio

from folio.core import tuid
from folio.core.domain_types import EntityType, Status
from folio.core.parameters import enum_value, is_email, lowercase, tuid_value
from folio.core.passwords import hash_password
from folio.schemas.user import User
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingEngine, ListingSpec, ResultShape
from folio.services.organizations import OrganizationService
from folio.store.table import IndexSpec, TableSpec
from folio.store.versioned_table import VersionedTable

USER_TABLE = TableSpec(
    entity_type=EntityType.USER.value,
    model=User,
    label=User.label,
    indexes=(
        IndexSpec("email", keys=lambda u: [u.email], text_value=User.label),
        IndexSpec(
            "org", keys=lambda u: [u.org_id], text_value=User.label,
            part_label=lambda u: u.org_name,
        ),
        IndexSpec("role", keys=lambda u: u.roles, text_value=User.label),
        IndexSpec("status", keys=lambda u: [u.status.value], text_value=User.label),
    ),
)


class UserService(EntityService[User]):

    def __init__(
        self,
        table: VersionedTable[User],
        engine: ListingEngine,
        organizations: OrganizationService,
    ):
        self.organizations = organizations
        super().__init__(table, engine)

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("users", ResultShape.BODIES)
            .filter("email", t.index_bodies("email"), lowercase, exhaustive=True)
            .filter("org", t.index_bodies("org"), tuid_value)
            .filter("role", t.index_bodies("role"), lowercase)
            .filter("status", t.index_bodies("status"), enum_value(Status))
            .otherwise(t.entity_ids())
            .present(self.present)
            .build(),
            ListingBuilder("user_names", ResultShape.TEXT_VALUES)
            .otherwise(t.entity_labels()).build(),
            ListingBuilder("user_emails", ResultShape.VALUES)
            .otherwise(t.part_keys("email")).build(),
            ListingBuilder("user_orgs", ResultShape.TEXT_VALUES)
            .otherwise(t.part_labels("org")).build(),
            ListingBuilder("user_roles", ResultShape.VALUES)
            .otherwise(t.part_keys("role")).build(),
            ListingBuilder("user_statuses", ResultShape.VALUES)
            .otherwise(t.part_keys("status")).build(),
        ]

    def present(self, entity: User) -> dict:
        return entity.public()

    async def create(self, entity: User) -> User:
        return await super().create(entity.model_copy(update={"password_hash": ""}))

    async def update(self, entity_id: str, entity: User) -> User:
        existing = await self.table.read(entity_id)
        entity = entity.model_copy(update={"password_hash": existing.password_hash})
        return await super().update(entity_id, entity)

    async def prepare(self, entity: User) -> User:
        update = {}
        if entity.password:
            update["password_hash"] = await asyncio.to_thread(hash_password, entity.password)
            update["password"] = ""
        if entity.org_id and tuid.is_valid(entity.org_id):
            if await self.organizations.exists(entity.org_id):
                org = await self.organizations.read(entity.org_id)
                update["org_name"] = org.name
        elif not entity.org_id:
            update["org_name"] = ""
        return entity.model_copy(update=update)

    def problems(self, entity: User) -> list[str]:
        found = []
        if not entity.email:
            found.append("email is missing")
        elif not is_email(entity.email):
            found.append(f"email {entity.email!r} is invalid")
        if entity.org_id and not tuid.is_valid(entity.org_id):
            found.append("org_id is not a valid TUID")
        return found

    async def conflicts(self, entity: User) -> list[str]:
        found = []
        if entity.email:
            owners = await self.table.read_index_ids("email", entity.email)
            if any(owner != entity.id for owner in owners):
                found.append(f"email {entity.email!r} is already in use")
        if entity.org_id and tuid.is_valid(entity.org_id):
            if not await self.organizations.exists(entity.org_id):
                found.append(f"organization {entity.org_id!r} not found")
        return found

    async def find_by_email(self, email: str) -> User | None:
        found = await self.table.read_index_bodies("email", email.strip().lower())
        return found[0] if found else None

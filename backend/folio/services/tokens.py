"""Token Service — bearer tokens issued by email/password grant.

Invariants:
    - Only an existing, non-disabled user with a matching password gets a token
    - Tokens expire token_lifetime after issue; expired tokens read as 404
    - Unknown email and wrong password are indistinguishable to the client
    - Password verification runs on a worker thread, off the event loop
"""

import asyncio
import logging
from datetime import timedelta

from folio.core import tuid
from folio.core.domain_types import EntityType, Status
from folio.core.errors import AuthenticationError
from folio.core.parameters import tuid_value
from folio.core.passwords import verify_password
from folio.schemas.token import Token, TokenRequest
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingEngine, ListingSpec, ResultShape
from folio.services.users import UserService
from folio.store.table import IndexSpec, TableSpec
from folio.store.versioned_table import VersionedTable

logger = logging.getLogger(__name__)

TOKEN_TABLE = TableSpec(
    entity_type=EntityType.TOKEN.value,
    model=Token,
    label=lambda t: t.user_id,
    versioned=False,
    expires_at=lambda t: t.expires_at,
    indexes=(
        IndexSpec(
            "user", keys=lambda t: [t.user_id], text_value=lambda t: t.email,
            part_label=lambda t: t.email,
        ),
    ),
)


class TokenService(EntityService[Token]):

    def __init__(
        self,
        table: VersionedTable[Token],
        engine: ListingEngine,
        users: UserService,
        lifetime_hours: int = 168,
    ):
        self.users = users
        self.lifetime = timedelta(hours=lifetime_hours)
        super().__init__(table, engine)

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("tokens", ResultShape.BODIES)
            .filter("user", t.index_bodies("user"), tuid_value)
            .otherwise(t.entity_ids())
            .build(),
            ListingBuilder("token_user_ids", ResultShape.TEXT_VALUES)
            .otherwise(t.part_labels("user")).build(),
        ]

    async def issue(self, request: TokenRequest) -> Token:
        user = await self.users.find_by_email(request.username)
        if user is None or not await asyncio.to_thread(
            verify_password, request.password, user.password_hash,
        ):
            logger.warning("Token denied: bad credentials")
            raise AuthenticationError()
        if user.status is Status.DISABLED:
            logger.warning(
                f"Token denied: user {user.id} is disabled",
                extra={"entity_id": user.id},
            )
            raise AuthenticationError("User account is disabled")
        return await self.create(Token(user_id=user.id, email=user.email))

    async def prepare(self, entity: Token) -> Token:
        return entity.model_copy(update={"expires_at": entity.created_at + self.lifetime})

    def problems(self, entity: Token) -> list[str]:
        return [] if tuid.is_valid(entity.user_id) else ["user_id is not a valid TUID"]

    async def delete_for_user(self, user_id: str) -> int:
        """Revoke every token of a user. Returns how many were deleted."""
        token_ids = await self.table.read_index_ids("user", user_id)
        for token_id in token_ids:
            await self.table.delete(token_id)
        return len(token_ids)

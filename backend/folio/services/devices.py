"""Device Service — client devices keyed by User-Agent, expiring after inactivity.

Invariants:
    - expires_at is always last_seen_at + device lifetime
    - update() touches last_seen_at, which moves the device between date partitions
"""

from datetime import datetime, timedelta, timezone

from folio.core import tuid
from folio.core.domain_types import EntityType
from folio.core.parameters import iso_date, tuid_value
from folio.schemas.device import Device
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingEngine, ListingSpec, ResultShape
from folio.store.table import IndexSpec, TableSpec
from folio.store.versioned_table import VersionedTable

DEVICE_TABLE = TableSpec(
    entity_type=EntityType.DEVICE.value,
    model=Device,
    label=lambda d: d.user_agent,
    expires_at=lambda d: d.expires_at,
    indexes=(
        IndexSpec("user", keys=lambda d: [d.user_id], text_value=lambda d: d.user_agent),
        IndexSpec("date", keys=lambda d: [d.last_seen_on()], text_value=lambda d: d.user_agent),
    ),
)


class DeviceService(EntityService[Device]):

    def __init__(
        self, table: VersionedTable[Device], engine: ListingEngine, lifetime_days: int = 365,
    ):
        self.lifetime = timedelta(days=lifetime_days)
        super().__init__(table, engine)

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("devices", ResultShape.BODIES)
            .filter("user", t.index_bodies("user"), tuid_value)
            .filter("date", t.index_bodies("date"), iso_date)
            .otherwise(t.entity_ids())
            .build(),
            ListingBuilder("device_agents", ResultShape.TEXT_VALUES)
            .otherwise(t.entity_labels()).build(),
            ListingBuilder("device_user_ids", ResultShape.VALUES)
            .otherwise(t.part_keys("user")).build(),
            ListingBuilder("device_dates", ResultShape.VALUES)
            .otherwise(t.part_keys("date")).build(),
        ]

    async def register(self, user_agent: str, user_id: str = "") -> Device:
        """Create a device from a request's User-Agent header."""
        return await self.create(Device(user_agent=user_agent, user_id=user_id))

    async def prepare(self, entity: Device) -> Device:
        seen = datetime.now(timezone.utc)
        return entity.model_copy(update={
            "last_seen_at": seen, "expires_at": seen + self.lifetime,
        })

    def problems(self, entity: Device) -> list[str]:
        found = []
        if not entity.user_agent.strip():
            found.append("user_agent is missing")
        if entity.user_id and not tuid.is_valid(entity.user_id):
            found.append("user_id is not a valid TUID")
        return found

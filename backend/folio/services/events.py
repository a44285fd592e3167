"""Event Service — expiring audit/log events, listed newest first.

Indexes (display text: event message):
    - entity: every ID the event refers to (user, entity, other IDs)
    - type: entity type
    - log_level: TRACE .. FATAL
    - date: creation day (yyyy-mm-dd)
"""

from datetime import timedelta

from folio.core import tuid
from folio.core.domain_types import EntityType, LogLevel
from folio.core.parameters import enum_value, iso_date, tuid_value
from folio.schemas.event import Event
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingEngine, ListingSpec, ResultShape
from folio.store.table import IndexSpec, TableSpec
from folio.store.versioned_table import VersionedTable

EVENT_TABLE = TableSpec(
    entity_type=EntityType.EVENT.value,
    model=Event,
    label=lambda e: e.message,
    versioned=False,
    expires_at=lambda e: e.expires_at,
    indexes=(
        IndexSpec("entity", keys=Event.ids, text_value=lambda e: e.message),
        IndexSpec("type", keys=lambda e: [e.entity_type], text_value=lambda e: e.message),
        IndexSpec("log_level", keys=lambda e: [e.log_level.value], text_value=lambda e: e.message),
        IndexSpec("date", keys=lambda e: [e.created_on()], text_value=lambda e: e.message),
    ),
)


class EventService(EntityService[Event]):

    def __init__(
        self, table: VersionedTable[Event], engine: ListingEngine, retention_days: int = 90,
    ):
        self.retention = timedelta(days=retention_days)
        super().__init__(table, engine)

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("events", ResultShape.BODIES)
            .filter("entity", t.index_bodies("entity"), tuid_value)
            .filter("type", t.index_bodies("type"))
            .filter("log_level", t.index_bodies("log_level"), enum_value(LogLevel))
            .filter("date", t.index_bodies("date"), iso_date)
            .otherwise(t.entity_ids())
            .newest_first()
            .build(),
            ListingBuilder("event_entity_ids", ResultShape.VALUES)
            .otherwise(t.part_keys("entity")).build(),
            ListingBuilder("event_entity_types", ResultShape.VALUES)
            .otherwise(t.part_keys("type")).build(),
            ListingBuilder("event_log_levels", ResultShape.VALUES)
            .otherwise(t.part_keys("log_level")).build(),
            ListingBuilder("event_dates", ResultShape.VALUES)
            .otherwise(t.part_keys("date")).build(),
        ]

    async def prepare(self, entity: Event) -> Event:
        if entity.expires_at is None:
            return entity.model_copy(update={"expires_at": entity.created_at + self.retention})
        return entity

    def problems(self, entity: Event) -> list[str]:
        found = []
        if not entity.message.strip():
            found.append("message is missing")
        for name in ("user_id", "entity_id"):
            value = getattr(entity, name)
            if value and not tuid.is_valid(value):
                found.append(f"{name} is not a valid TUID")
        return found

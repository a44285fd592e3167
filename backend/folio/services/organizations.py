"""Organization Service — versioned organizations with a status index."""

from folio.core.domain_types import EntityType, Status
from folio.core.parameters import enum_value
from folio.schemas.organization import Organization
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingSpec, ResultShape
from folio.store.table import IndexSpec, TableSpec

ORGANIZATION_TABLE = TableSpec(
    entity_type=EntityType.ORGANIZATION.value,
    model=Organization,
    label=lambda o: o.name,
    indexes=(
        IndexSpec("status", keys=lambda o: [o.status.value], text_value=lambda o: o.name),
    ),
)


class OrganizationService(EntityService[Organization]):

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("organizations", ResultShape.BODIES)
            .filter("status", t.index_bodies("status"), enum_value(Status))
            .otherwise(t.entity_ids())
            .build(),
            ListingBuilder("organization_names", ResultShape.TEXT_VALUES)
            .otherwise(t.entity_labels()).build(),
            ListingBuilder("organization_statuses", ResultShape.VALUES)
            .otherwise(t.part_keys("status")).build(),
        ]

    def problems(self, entity: Organization) -> list[str]:
        return [] if entity.name else ["name is missing"]

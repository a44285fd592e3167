"""Email Service — versioned outbound messages, indexed by address and status.

Every from/to/cc/bcc address gets its own partition, so a listing by address
returns all mail sent to or from that address. Delivery is not performed here.
"""

from folio.core.domain_types import EmailStatus, EntityType
from folio.core.parameters import enum_value, is_email, lowercase
from folio.schemas.email import Email
from folio.services.entity_service import EntityService
from folio.services.listing import ListingBuilder, ListingSpec, ResultShape
from folio.store.table import IndexSpec, TableSpec

EMAIL_TABLE = TableSpec(
    entity_type=EntityType.EMAIL.value,
    model=Email,
    label=lambda e: e.subject,
    indexes=(
        IndexSpec("address", keys=Email.addresses, text_value=lambda e: e.subject),
        IndexSpec("status", keys=lambda e: [e.status.value], text_value=lambda e: e.subject),
    ),
)


class EmailService(EntityService[Email]):

    def define_listings(self) -> list[ListingSpec]:
        t = self.table
        return [
            ListingBuilder("emails", ResultShape.BODIES)
            .filter("address", t.index_bodies("address"), lowercase)
            .filter("status", t.index_bodies("status"), enum_value(EmailStatus))
            .otherwise(t.entity_ids())
            .build(),
            ListingBuilder("email_addresses", ResultShape.VALUES)
            .otherwise(t.part_keys("address")).build(),
            ListingBuilder("email_statuses", ResultShape.VALUES)
            .otherwise(t.part_keys("status")).build(),
        ]

    def problems(self, entity: Email) -> list[str]:
        found = []
        if not entity.from_.address:
            found.append("from address is missing")
        if not entity.to:
            found.append("at least one to address is required")
        for identity in (entity.from_, *entity.to, *entity.cc, *entity.bcc):
            if identity.address and not is_email(identity.address):
                found.append(f"address {identity.address!r} is invalid")
        if not entity.subject.strip():
            found.append("subject is missing")
        return found

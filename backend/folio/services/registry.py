"""Services Registry — the explicit container of every service, built once at startup.

Invariants:
    - Exactly one Services instance per application (created in the lifespan,
      stored on app.state.services)
    - Services share one DatabaseSessionManager and one ListingEngine
    - Wiring is acyclic: organizations ← users ← tokens; events ← audit

Design Decisions:
    - Plain dataclass over a DI framework: handlers receive it through a FastAPI
      dependency, tests build their own against an in-memory database
"""

from dataclasses import dataclass

from folio.config import Settings
from folio.infrastructure.database import DatabaseSessionManager
from folio.services.audit import AuditTrail
from folio.services.contents import CONTENT_TABLE, ContentService
from folio.services.devices import DEVICE_TABLE, DeviceService
from folio.services.emails import EMAIL_TABLE, EmailService
from folio.services.events import EVENT_TABLE, EventService
from folio.services.listing import ListingEngine
from folio.services.metrics import METRIC_TABLE, MetricService
from folio.services.organizations import ORGANIZATION_TABLE, OrganizationService
from folio.services.tokens import TOKEN_TABLE, TokenService
from folio.services.users import USER_TABLE, UserService
from folio.store.versioned_table import VersionedTable


@dataclass
class Services:
    db: DatabaseSessionManager
    engine: ListingEngine
    contents: ContentService
    organizations: OrganizationService
    users: UserService
    emails: EmailService
    devices: DeviceService
    tokens: TokenService
    metrics: MetricService
    events: EventService
    audit: AuditTrail
    settings: Settings


def build_services(db: DatabaseSessionManager, settings: Settings) -> Services:
    engine = ListingEngine(
        max_workers=settings.fan_out_max_workers,
        timeout_seconds=settings.listing_timeout_seconds,
    )
    organizations = OrganizationService(VersionedTable(db, ORGANIZATION_TABLE), engine)
    users = UserService(VersionedTable(db, USER_TABLE), engine, organizations)
    events = EventService(
        VersionedTable(db, EVENT_TABLE), engine, settings.event_retention_days,
    )
    return Services(
        db=db,
        engine=engine,
        contents=ContentService(VersionedTable(db, CONTENT_TABLE), engine),
        organizations=organizations,
        users=users,
        emails=EmailService(VersionedTable(db, EMAIL_TABLE), engine),
        devices=DeviceService(
            VersionedTable(db, DEVICE_TABLE), engine, settings.device_lifetime_days,
        ),
        tokens=TokenService(
            VersionedTable(db, TOKEN_TABLE), engine, users, settings.token_lifetime_hours,
        ),
        metrics=MetricService(
            VersionedTable(db, METRIC_TABLE), engine, settings.metric_retention_days,
        ),
        events=events,
        audit=AuditTrail(events),
        settings=settings,
    )

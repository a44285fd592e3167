"""Audit Trail — best-effort event recording around mutating operations.

Invariants:
    - One INFO event per successful mutation, written after the mutation succeeded
    - One ERROR event per StoreError, written by the global error handler
    - An audit write failure is logged and discarded; it never changes the response

Design Decisions:
    - async context manager over per-route try/except: the route marks the
      affected entity on the yielded record, the wrapper writes the event
    - Failed mutations are not audited here; StoreError is recorded centrally
      and validation failures are not audit-worthy
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from folio.core.domain_types import LogLevel
from folio.core.errors import StoreError
from folio.schemas.event import Event
from folio.services.events import EventService

logger = logging.getLogger(__name__)


@dataclass
class AuditRecord:
    """Filled in by the audited block: which entity the action touched."""
    entity_id: str = ""
    user_id: str = ""
    other_ids: list[str] = field(default_factory=list)


class AuditTrail:

    def __init__(self, events: EventService):
        self._events = events

    @asynccontextmanager
    async def action(
        self, verb: str, entity_type: str, uri: str = "",
    ) -> AsyncIterator[AuditRecord]:
        record = AuditRecord()
        yield record
        await self.record(
            LogLevel.INFO,
            f"{verb} {entity_type} {record.entity_id}".rstrip(),
            entity_type=entity_type,
            entity_id=record.entity_id,
            user_id=record.user_id,
            other_ids=record.other_ids,
            uri=uri,
        )

    async def store_failure(self, exc: StoreError, uri: str = "") -> str | None:
        """Record a store failure; returns the event ID, or None if recording failed."""
        return await self.record(
            LogLevel.ERROR,
            f"{exc.message} ({exc.context.debug_info or {}})",
            entity_type=exc.context.entity_type or "",
            entity_id=exc.context.entity_id or "",
            uri=uri,
        )

    async def record(
        self,
        level: LogLevel,
        message: str,
        entity_type: str = "",
        entity_id: str = "",
        user_id: str = "",
        other_ids: list[str] | None = None,
        uri: str = "",
    ) -> str | None:
        event = Event(
            log_level=level,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            other_ids=other_ids or [],
            uri=uri,
        )
        try:
            saved = await self._events.create(event)
        except Exception as e:
            logger.warning(
                f"Audit event not recorded: {e}",
                extra={"entity_type": entity_type, "entity_id": entity_id},
            )
            return None
        return saved.id

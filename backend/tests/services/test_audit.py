"""Tests for AuditTrail — INFO events on success, nothing on failure, never raises."""

import pytest

from folio.core.domain_types import LogLevel
from folio.core.errors import ErrorContext, StoreError
from folio.services.listing import ListingParams


async def test_successful_action_records_info_event(services):
    async with services.audit.action("Created", "Content", "/api/v1/contents") as record:
        record.entity_id = "0000000000A00000"
    events = await services.events.listing("events", ListingParams())
    assert len(events) == 1
    assert events[0].log_level is LogLevel.INFO
    assert events[0].message == "Created Content 0000000000A00000"
    assert events[0].uri == "/api/v1/contents"


async def test_failed_action_records_nothing(services):
    with pytest.raises(RuntimeError):
        async with services.audit.action("Created", "Content"):
            raise RuntimeError("boom")
    assert await services.events.listing("events", ListingParams()) == []


async def test_store_failure_returns_event_id(services):
    event_id = await services.audit.store_failure(StoreError("disk full", "commit"))
    event = await services.events.read(event_id)
    assert event.log_level is LogLevel.ERROR


async def test_audit_write_failure_is_swallowed(services, monkeypatch):
    async def broken(event):
        raise StoreError("down", "commit")

    monkeypatch.setattr(services.events, "create", broken)
    assert await services.audit.store_failure(StoreError("x", "query")) is None


async def test_store_failure_is_indexed_under_the_entity(services):
    failure = StoreError(
        "disk full", "commit",
        ErrorContext(entity_type="Content", entity_id="0000000000A00000"),
    )
    await services.audit.store_failure(failure)
    found = await services.events.listing(
        "events", ListingParams(), {"entity": "0000000000A00000"},
    )
    assert [e.entity_type for e in found] == ["Content"]

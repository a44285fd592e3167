"""Tests for ListingEngine — the full pipeline over in-memory accessors."""

import asyncio

import pytest

from folio.core.domain_types import TextValue
from folio.core.errors import ListingTimeoutError, ValidationError
from folio.services.listing import ListingBuilder, ListingEngine, ListingParams, ResultShape
from folio.store.table import IndexAccessor

IDS = ["A1", "A2", "A3", "A4"]
BODIES = {"A1": {"id": "A1"}, "A3": {"id": "A3"}, "A4": {"id": "A4"}}


async def _read_ids(page=None):
    if page is None:
        return list(IDS)
    ids = [i for i in IDS if not page.bounded or i > page.offset]
    return ids[: page.limit]


async def _fetch(entity_id):
    return BODIES[entity_id]


ID_ACCESSOR = IndexAccessor(page=_read_ids, all=_read_ids, fetch=_fetch)


async def test_body_listing_fans_out_and_drops_missing():
    spec = ListingBuilder("things", ResultShape.BODIES).otherwise(ID_ACCESSOR).build()
    found = await ListingEngine().run(spec, ListingParams(limit="3"))
    assert found == [{"id": "A1"}, {"id": "A3"}]


async def test_body_listing_pages_by_default():
    spec = (
        ListingBuilder("things", ResultShape.BODIES)
        .otherwise(ID_ACCESSOR).default_limit(2).build()
    )
    found = await ListingEngine().run(spec, ListingParams())
    assert found == [{"id": "A1"}]


async def test_offset_is_exclusive():
    spec = ListingBuilder("things", ResultShape.BODIES).otherwise(ID_ACCESSOR).build()
    found = await ListingEngine().run(spec, ListingParams(offset="A1", limit="2"))
    assert found == [{"id": "A3"}]


async def test_text_listing_search_and_present():
    values = [TextValue("1", "Zed"), TextValue("2", "Abe")]

    async def read(page=None):
        return values

    spec = (
        ListingBuilder("names", ResultShape.TEXT_VALUES)
        .otherwise(IndexAccessor(page=read, all=read))
        .present(lambda t: t.value)
        .build()
    )
    assert await ListingEngine().run(spec, ListingParams(sorted="true")) == ["Abe", "Zed"]
    assert await ListingEngine().run(spec, ListingParams(search="e")) == ["Abe", "Zed"]


async def test_bad_parameter_fails_before_store_access():
    calls = []

    async def read(page=None):
        calls.append(page)
        return []

    spec = (
        ListingBuilder("names", ResultShape.VALUES)
        .otherwise(IndexAccessor(page=read, all=read)).build()
    )
    with pytest.raises(ValidationError):
        await ListingEngine().run(spec, ListingParams(limit="0"))
    assert calls == []


async def test_timeout_raises_listing_timeout_error():
    async def slow(page=None):
        await asyncio.sleep(1)
        return []

    spec = (
        ListingBuilder("slow", ResultShape.VALUES)
        .otherwise(IndexAccessor(page=slow, all=slow)).build()
    )
    with pytest.raises(ListingTimeoutError) as exc_info:
        await ListingEngine(timeout_seconds=0.05).run(spec, ListingParams())
    assert exc_info.value.http_status == 504


def test_builder_requires_default_accessor():
    with pytest.raises(ValueError):
        ListingBuilder("empty", ResultShape.VALUES).build()


async def test_timeout_during_fan_out_returns_no_partial_list():
    async def fetch(entity_id):
        if entity_id == "A4":
            await asyncio.sleep(1)
        return {"id": entity_id}

    spec = (
        ListingBuilder("things", ResultShape.BODIES)
        .otherwise(IndexAccessor(page=_read_ids, all=_read_ids, fetch=fetch)).build()
    )
    with pytest.raises(ListingTimeoutError):
        await ListingEngine(timeout_seconds=0.05).run(spec, ListingParams(limit="4"))

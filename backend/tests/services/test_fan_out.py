"""Tests for FanOutRetriever — ordering, missing slots, bounded concurrency, cancellation."""

import asyncio

import pytest

from folio.core.errors import NotFoundError
from folio.services.fan_out import MISSING, FanOutRetriever, present


async def test_slots_follow_request_order_not_completion_order():
    delays = {"a": 0.03, "b": 0.0, "c": 0.01}

    async def fetch(entity_id):
        await asyncio.sleep(delays[entity_id])
        return entity_id.upper()

    slots = await FanOutRetriever(fetch).fetch_all(["a", "b", "c"])
    assert slots == ["A", "B", "C"]


async def test_failed_fetch_leaves_missing_slot():
    async def fetch(entity_id):
        if entity_id == "b":
            raise NotFoundError("Content", entity_id)
        return entity_id

    slots = await FanOutRetriever(fetch).fetch_all(["a", "b", "c"])
    assert slots[1] is MISSING
    assert present(slots) == ["a", "c"]


async def test_empty_ids_make_no_calls():
    async def fetch(entity_id):
        raise AssertionError("fetch called")

    assert await FanOutRetriever(fetch).fetch_all([]) == []


async def test_concurrency_is_bounded_by_max_workers():
    active = 0
    peak = 0

    async def fetch(entity_id):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1
        return entity_id

    await FanOutRetriever(fetch, max_workers=2).fetch_all([str(i) for i in range(6)])
    assert peak == 2


def test_max_workers_must_be_positive():
    async def fetch(entity_id):
        return entity_id

    with pytest.raises(ValueError):
        FanOutRetriever(fetch, max_workers=0)


async def test_cancelling_the_caller_cancels_every_pending_fetch():
    started, cancelled = [], []

    async def fetch(entity_id):
        started.append(entity_id)
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(entity_id)
            raise
        return entity_id

    task = asyncio.create_task(FanOutRetriever(fetch).fetch_all(["a", "b", "c"]))
    while len(started) < 3:
        await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert sorted(cancelled) == ["a", "b", "c"]

"""Tests for MetricService.stats — filter precedence, date window, empty results."""

from datetime import date, timedelta

import pytest

from folio.core import tuid
from folio.core.errors import NotFoundError, UnprocessableEntityError, ValidationError
from folio.schemas.metric import Metric


async def _record(services, value, **fields):
    fields.setdefault("entity_type", "Content")
    return await services.metrics.create(
        Metric(title="Load", value=value, units="s", **fields),
    )


async def test_stats_by_entity(services):
    target = tuid.new_id()
    for v in (1.0, 2.0, 6.0):
        await _record(services, v, entity_id=target)
    await _record(services, 100.0, entity_id=tuid.new_id())

    stats = await services.metrics.stats(entity=target)
    assert stats.entity_id == target
    assert stats.count == 3
    assert stats.mean == 3.0
    assert stats.median == 2.0


async def test_entity_filter_beats_type(services):
    target = tuid.new_id()
    await _record(services, 5.0, entity_id=target)
    await _record(services, 7.0)
    stats = await services.metrics.stats(entity=target, entity_type="Content")
    assert stats.count == 1
    assert stats.entity_type == ""


async def test_stats_by_tag_is_lowercased(services):
    await _record(services, 2.0, tags=["Mobile"])
    stats = await services.metrics.stats(tag="MOBILE")
    assert stats.tag == "mobile"
    assert stats.sum == 2.0


async def test_date_window_excludes_everything_outside(services):
    await _record(services, 1.0)
    tomorrow = (date.today() + timedelta(days=2)).isoformat()
    with pytest.raises(NotFoundError):
        await services.metrics.stats(entity_type="Content", from_date=tomorrow)


async def test_no_filter_is_a_validation_error(services):
    with pytest.raises(ValidationError):
        await services.metrics.stats()


async def test_bad_date_names_parameter(services):
    with pytest.raises(ValidationError) as exc_info:
        await services.metrics.stats(entity_type="Content", to_date="yesterday")
    assert exc_info.value.context.parameter == "to"


async def test_metric_needs_units(services):
    with pytest.raises(UnprocessableEntityError):
        await services.metrics.create(Metric(title="x", entity_type="Content", value=1))

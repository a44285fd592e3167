"""Tests for TUID generation, validation, and decoding."""

from datetime import date, datetime, timezone

import pytest

from folio.core import tuid


def test_new_id_has_expected_shape():
    value = tuid.new_id()
    assert len(value) == tuid.TUID_LENGTH
    assert tuid.is_valid(value)


def test_ids_are_strictly_increasing_within_one_instant():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    ids = [tuid.new_id(now) for _ in range(50)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 50


def test_order_follows_time():
    early = tuid.new_id(datetime(2020, 1, 1, tzinfo=timezone.utc))
    late = tuid.first_id_with_time(datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert early < late


def test_info_decodes_timestamp():
    t = datetime(2023, 3, 14, 15, 9, 26, 535000, tzinfo=timezone.utc)
    decoded = tuid.info(tuid.first_id_with_time(t))
    assert decoded.timestamp == t
    assert decoded.entropy == "00000"


@pytest.mark.parametrize("value", [None, "", "short", "0123456789abcde!", "x" * 17])
def test_is_valid_rejects_malformed(value):
    assert not tuid.is_valid(value)


def test_info_raises_on_malformed():
    with pytest.raises(ValueError):
        tuid.info("not-a-tuid")


def test_date_range_ids_bounds():
    low, high = tuid.date_range_ids(date(2024, 1, 1), date(2024, 1, 2))
    inside = tuid.first_id_with_time(datetime(2024, 1, 1, 12, tzinfo=timezone.utc))
    assert low <= inside < high


def test_date_range_ids_unbounded_sides():
    assert tuid.date_range_ids(None, None) == (None, None)

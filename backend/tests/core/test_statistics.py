"""Tests for calculate_stats — pure aggregation over metric values."""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from folio.core.statistics import calculate_stats


@dataclass
class _M:
    value: float
    created_at: datetime | None = None


def test_empty_input_gives_zero_count():
    stats = calculate_stats([])
    assert stats.count == 0
    assert stats.mean is None


def test_aggregates():
    t1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    t2 = datetime(2024, 1, 3, tzinfo=timezone.utc)
    stats = calculate_stats([_M(2.0, t2), _M(4.0, t1), _M(9.0)])
    assert stats.count == 3
    assert stats.sum == 15.0
    assert stats.min == 2.0
    assert stats.max == 9.0
    assert stats.mean == 5.0
    assert stats.median == 4.0
    assert stats.std_dev == pytest.approx(2.9439, rel=1e-3)
    assert stats.from_time == t1
    assert stats.to_time == t2

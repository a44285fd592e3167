"""Metric Statistics — pure aggregation of metric values. No IO.

Invariants:
    - Empty input produces count=0 and all aggregates None
    - std_dev is the population standard deviation
    - from_time/to_time span the earliest and latest created_at
"""

import statistics
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence


class Measured(Protocol):
    value: float
    created_at: datetime | None


@dataclass(frozen=True)
class MetricStats:
    count: int = 0
    sum: float | None = None
    min: float | None = None
    max: float | None = None
    mean: float | None = None
    median: float | None = None
    std_dev: float | None = None
    from_time: datetime | None = None
    to_time: datetime | None = None


def calculate_stats(metrics: Sequence[Measured]) -> MetricStats:
    if not metrics:
        return MetricStats()
    values = [m.value for m in metrics]
    times = [m.created_at for m in metrics if m.created_at is not None]
    return MetricStats(
        count=len(values),
        sum=sum(values),
        min=min(values),
        max=max(values),
        mean=statistics.fmean(values),
        median=statistics.median(values),
        std_dev=statistics.pstdev(values),
        from_time=min(times) if times else None,
        to_time=max(times) if times else None,
    )

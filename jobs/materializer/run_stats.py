"""Descriptive statistics over benchmark run durations."""

from __future__ import annotations

import math
from statistics import mean, median, pvariance
from typing import Sequence

from .models import RunStatistics


def aggregate(durations: Sequence[float], n: int, record_count: int = 0) -> RunStatistics:
    """Aggregate per-run durations (seconds) into RunStatistics.

    ``n`` must match ``len(durations)`` and be positive. Variance is the
    population variance (divisor n).
    """
    if n <= 0:
        raise ValueError(f"at least one duration is required, got n={n}")
    if n != len(durations):
        raise ValueError(f"n={n} does not match {len(durations)} durations")

    run_order = tuple(float(d) for d in durations)
    ordered = tuple(sorted(run_order))

    avg = mean(run_order)
    variance = pvariance(run_order, mu=avg)

    return RunStatistics(
        durations=run_order,
        sorted_durations=ordered,
        minimum=ordered[0],
        maximum=ordered[n - 1],
        mean=avg,
        median=median(ordered),
        variance=variance,
        standard_deviation=math.sqrt(variance),
        record_count=record_count,
        iterations=n,
    )

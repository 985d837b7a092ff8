"""Formato de consola para los resultados del materializer."""

from __future__ import annotations

from .benchmark import RunTiming
from .models import RunStatistics


def format_run(timing: RunTiming) -> str:
    return (
        f"Time elapsed: {timing.elapsed_seconds:f} seconds "
        f"for {timing.record_count} measurements"
    )


def _format_durations(durations: tuple[float, ...]) -> str:
    return "[" + " ".join(f"{d:f}" for d in durations) + "]"


def format_report(stats: RunStatistics, title: str = "Python Materializer Microbenchmark") -> str:
    lines = [
        title,
        f"Number of Iterations:\t\t{stats.iterations}",
        f"Datapoints processed each:\t{stats.record_count}",
        f"Fastest iteration (min):\t{stats.minimum:f} seconds",
        f"Slowest iteration (max):\t{stats.maximum:f} seconds",
        f"Average duration (avg/mean):\t{stats.mean:f} seconds",
        f"Median duration (median):\t{stats.median:f} seconds",
        f"Standard deviation:\t\t{stats.standard_deviation:f} seconds",
        f"Variance:\t\t\t{stats.variance:f} seconds",
        "",
        "All runs:",
        _format_durations(stats.sorted_durations),
        "",
        "All runs (unsorted):",
        _format_durations(stats.durations),
    ]
    return "\n".join(lines)

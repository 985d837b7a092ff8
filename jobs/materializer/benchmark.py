"""Microbenchmark del materializer.

Ejecuta el full refresh N veces, una tras otra, y agrega las duraciones.
Si una iteración falla, el benchmark completo aborta sin estadísticas.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .models import RunStatistics
from .progress import NullProgressObserver, ProgressObserver
from .run_stats import aggregate
from .runner import PipelineRunner

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class RunTiming:
    record_count: int
    elapsed_seconds: float


def time_run(runner: PipelineRunner, clock: Clock = time.perf_counter) -> RunTiming:
    """Una corrida del pipeline acotada por dos lecturas del reloj."""
    start = clock()
    record_count = runner.run()
    end = clock()
    return RunTiming(record_count=record_count, elapsed_seconds=end - start)


class BenchmarkHarness:
    def __init__(
        self,
        runner: PipelineRunner,
        observer: Optional[ProgressObserver] = None,
        clock: Clock = time.perf_counter,
    ):
        self._runner = runner
        self._observer = observer or NullProgressObserver()
        self._clock = clock

    def benchmark(self, iterations: int) -> RunStatistics:
        """Corre el pipeline ``iterations`` veces y devuelve las estadísticas.

        No valida ``iterations``; rechazar valores no positivos es tarea del CLI.
        """
        logger.info("Starting microbenchmark iterations=%d", iterations)

        durations: list[float] = []
        record_count = 0
        for i in range(iterations):
            timing = time_run(self._runner, self._clock)
            durations.append(timing.elapsed_seconds)
            record_count = timing.record_count
            self._observer.on_iteration_complete(i + 1, iterations)

        stats = aggregate(durations, len(durations), record_count=record_count)
        logger.info(
            "Microbenchmark finished iterations=%d records=%d mean=%.6fs median=%.6fs",
            stats.iterations,
            stats.record_count,
            stats.mean,
            stats.median,
        )
        return stats

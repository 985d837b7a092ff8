"""Materializer orchestrator: full refresh de materialized_view.

Cada corrida:
1. Vacía materialized_view (DELETE sin condición).
2. Lee todo event_store ordenado por id.
3. Transforma y escribe cada measurement, en orden.

No hay retry: cualquier MaterializerError aborta la corrida y la vista
puede quedar parcialmente reconstruida.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .models import EnrichedMeasurement, Measurement
from .progress import NullProgressObserver, ProgressObserver
from .stores import MaterializedViewSink, MeasurementSource
from .transformer import transform

logger = logging.getLogger(__name__)


class PipelineRunner:
    def __init__(
        self,
        source: MeasurementSource,
        sink: MaterializedViewSink,
        observer: Optional[ProgressObserver] = None,
        transform_fn: Callable[[Measurement], EnrichedMeasurement] = transform,
    ):
        self._source = source
        self._sink = sink
        self._observer = observer or NullProgressObserver()
        self._transform = transform_fn

    def run(self) -> int:
        """Reconstruye la vista completa y devuelve la cantidad de measurements."""
        t0 = time.monotonic()

        self._sink.clear()
        measurements = self._source.fetch_all()
        self._observer.on_run_started(len(measurements))

        negative_latency = 0
        for measurement in measurements:
            enriched = self._transform(measurement)
            if enriched.latency_ms < 0:
                negative_latency += 1
            self._sink.insert(enriched)
            self._observer.on_record_processed()

        if negative_latency:
            logger.warning(
                "materialize_negative_latency rows=%d (processed_on < created_on)",
                negative_latency,
            )

        run_ms = (time.monotonic() - t0) * 1000
        logger.info("materialize_run records=%d ms=%.1f", len(measurements), run_ms)
        return len(measurements)

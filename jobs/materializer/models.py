"""Modelos de datos del materializer.

- Measurement: evento crudo leído de event_store (inmutable)
- EnrichedMeasurement: Measurement + latencia + nivel de peligro
- RunStatistics: resultado de un benchmark
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DangerLevel(str, Enum):
    """Nivel de peligro de la cámara fría, de menor a mayor severidad."""

    NO = "No"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return list(DangerLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, DangerLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, DangerLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, DangerLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, DangerLevel):
            return NotImplemented
        return self.rank >= other.rank


@dataclass(frozen=True)
class Measurement:
    id: int
    sensor_id: int
    temperature: float  # °C
    humidity: float  # %
    event_stream: str  # transporte de ingesta (kafka, mqtt, ...)
    created_on: datetime
    processed_on: datetime


@dataclass(frozen=True)
class EnrichedMeasurement:
    """Measurement con los dos campos derivados.

    Composición: el evento original queda intacto en ``measurement``.
    """

    measurement: Measurement
    latency_ms: float
    danger_level: DangerLevel

    @property
    def id(self) -> int:
        return self.measurement.id

    def to_row(self) -> dict:
        """Parámetros del INSERT en materialized_view (orden de columnas de la vista)."""
        m = self.measurement
        return {
            "id": m.id,
            "created_on": m.created_on,
            "danger_level": self.danger_level.value,
            "event_stream": m.event_stream,
            "humidity": m.humidity,
            "latency_ms": self.latency_ms,
            "processed_on": m.processed_on,
            "sensor_id": m.sensor_id,
            "temperature": m.temperature,
        }


@dataclass(frozen=True)
class RunStatistics:
    """Estadísticas de un benchmark (todas las duraciones en segundos)."""

    durations: tuple[float, ...]  # orden de ejecución
    sorted_durations: tuple[float, ...]
    minimum: float
    maximum: float
    mean: float
    median: float
    variance: float  # poblacional (divisor n)
    standard_deviation: float
    record_count: int = 0
    iterations: int = 0

    def to_dict(self) -> dict:
        return {
            "iterations": self.iterations,
            "record_count": self.record_count,
            "min_s": self.minimum,
            "max_s": self.maximum,
            "mean_s": self.mean,
            "median_s": self.median,
            "variance": self.variance,
            "std_s": self.standard_deviation,
            "durations": list(self.durations),
            "sorted_durations": list(self.sorted_durations),
        }

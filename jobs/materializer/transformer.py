"""Transformación Measurement -> EnrichedMeasurement.

Función pura: no hace I/O y no falla para datos bien formados. No valida
rangos; una latencia negativa (clock skew) se propaga tal cual.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .models import DangerLevel, EnrichedMeasurement, Measurement

_ONE_MICROSECOND = timedelta(microseconds=1)

# (temperatura, humedad, nivel) de más a menos severo; gana el primero que cumple.
DANGER_THRESHOLDS: tuple[tuple[float, float, DangerLevel], ...] = (
    (10.0, 60.0, DangerLevel.CRITICAL),
    (7.0, 50.0, DangerLevel.HIGH),
    (5.0, 40.0, DangerLevel.MEDIUM),
    (3.0, 20.0, DangerLevel.LOW),
)


def compute_latency_ms(created_on: datetime, processed_on: datetime) -> float:
    """Latencia en milisegundos, con fracción.

    Se pasa primero a microsegundos enteros y luego se divide, para no
    truncar antes de tiempo.
    """
    micros = (processed_on - created_on) // _ONE_MICROSECOND
    return micros / 1000


def classify_danger(temperature: float, humidity: float) -> DangerLevel:
    for max_temperature, max_humidity, level in DANGER_THRESHOLDS:
        if temperature > max_temperature or humidity > max_humidity:
            return level
    return DangerLevel.NO


def transform(measurement: Measurement) -> EnrichedMeasurement:
    return EnrichedMeasurement(
        measurement=measurement,
        latency_ms=compute_latency_ms(measurement.created_on, measurement.processed_on),
        danger_level=classify_danger(measurement.temperature, measurement.humidity),
    )

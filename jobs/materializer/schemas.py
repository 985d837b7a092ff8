"""Schema de validación para filas de event_store.

Convierte una fila cruda del driver (Decimal, str ISO en SQLite, datetime
en Postgres) a Measurement. Si la fila no cumple el schema se lanza
MeasurementDecodeError y la corrida aborta.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from .errors import MeasurementDecodeError
from .models import Measurement


class EventStoreRow(BaseModel):
    """Fila de event_store tal como la devuelve el driver."""

    id: int
    sensor_id: int
    temperature: float = Field(..., description="Temperatura en °C")
    humidity: float = Field(..., description="Humedad relativa en %")
    event_stream: str
    created_on: datetime
    processed_on: datetime

    def to_measurement(self) -> Measurement:
        return Measurement(
            id=self.id,
            sensor_id=self.sensor_id,
            temperature=self.temperature,
            humidity=self.humidity,
            event_stream=self.event_stream,
            created_on=self.created_on,
            processed_on=self.processed_on,
        )


def decode_measurement(row: Mapping[str, Any]) -> Measurement:
    """Mapea una fila (``row._mapping``) a Measurement o lanza MeasurementDecodeError."""
    try:
        parsed = EventStoreRow.model_validate(dict(row))
    except ValidationError as e:
        raise MeasurementDecodeError(row.get("id"), e) from e
    return parsed.to_measurement()

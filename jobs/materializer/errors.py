"""Excepciones del materializer.

Cualquier error es fatal para la corrida en curso: no hay retry ni
resultados parciales. El caller (CLI) decide cómo terminar el proceso.
"""

from __future__ import annotations

from typing import Optional


class MaterializerError(Exception):
    """Base de todos los errores del materializer."""


class StoreQueryError(MaterializerError):
    """Fallo de conexión o de consulta contra event_store / materialized_view."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store operation '{operation}' failed: {cause}")


class MeasurementDecodeError(MaterializerError):
    """Una fila de event_store no se puede mapear a Measurement."""

    def __init__(self, row_id: Optional[object], cause: Exception):
        self.row_id = row_id
        self.cause = cause
        super().__init__(f"Cannot decode event_store row id={row_id}: {cause}")


class ViewWriteError(MaterializerError):
    """El insert en materialized_view fue rechazado (constraint, tipo, etc.)."""

    def __init__(self, measurement_id: int, cause: Exception):
        self.measurement_id = measurement_id
        self.cause = cause
        super().__init__(
            f"Cannot write measurement id={measurement_id} to materialized_view: {cause}"
        )

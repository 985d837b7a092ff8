"""Acceso a event_store (lectura) y materialized_view (escritura).

El pipeline solo depende de los protocolos MeasurementSource y
MaterializedViewSink; las implementaciones SQLAlchemy reciben el Engine por
constructor (no hay engine global).

Cada operación de escritura corre en su propia transacción: si un insert
falla, las filas anteriores quedan escritas.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from common.config import Settings
from common.db import get_engine

from .db_queries import delete_materialized_view, ensure_schema, insert_materialized_row, select_measurements
from .errors import MeasurementDecodeError, StoreQueryError, ViewWriteError
from .models import EnrichedMeasurement, Measurement
from .schemas import decode_measurement

logger = logging.getLogger(__name__)


class MeasurementSource(Protocol):
    """Origen de measurements, ordenados por id ascendente."""

    def fetch_all(self) -> list[Measurement]:
        ...


class MaterializedViewSink(Protocol):
    """Destino de la vista materializada."""

    def clear(self) -> None:
        ...

    def insert(self, enriched: EnrichedMeasurement) -> None:
        ...


class EventStoreReader:
    """Lee todo event_store en una sola consulta."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def fetch_all(self) -> list[Measurement]:
        try:
            with self._engine.connect() as conn:
                rows = select_measurements(conn)
        except SQLAlchemyError as e:
            raise StoreQueryError("fetch_all", e) from e
        except ValueError as e:
            # El result processor del driver no pudo convertir una columna (p.ej. timestamp).
            raise MeasurementDecodeError(None, e) from e

        measurements = [decode_measurement(row) for row in rows]
        logger.debug("event_store_read rows=%d", len(measurements))
        return measurements


class MaterializedViewWriter:
    """Escribe en materialized_view, una transacción por operación."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def clear(self) -> None:
        try:
            with self._engine.begin() as conn:
                deleted = delete_materialized_view(conn)
        except SQLAlchemyError as e:
            raise StoreQueryError("clear", e) from e
        logger.debug("materialized_view_cleared rows=%s", deleted)

    def insert(self, enriched: EnrichedMeasurement) -> None:
        try:
            with self._engine.begin() as conn:
                insert_materialized_row(conn, enriched.to_row())
        except (IntegrityError, DataError) as e:
            raise ViewWriteError(enriched.id, e) from e
        except SQLAlchemyError as e:
            raise StoreQueryError("insert", e) from e


def open_engine(settings: Settings) -> Engine:
    """Engine verificado (SELECT 1); un fallo de conexión es StoreQueryError."""
    try:
        return get_engine(settings)
    except SQLAlchemyError as e:
        raise StoreQueryError("connect", e) from e


def init_schema(engine: Engine) -> None:
    try:
        with engine.begin() as conn:
            ensure_schema(conn)
    except SQLAlchemyError as e:
        raise StoreQueryError("init_schema", e) from e
    logger.info("Schema OK (event_store, materialized_view)")

"""SQL helper functions for the materializer.

All database queries are centralized here. No business logic.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Connection, RowMapping

EVENT_STORE_TABLE = "event_store"
MATERIALIZED_VIEW_TABLE = "materialized_view"

# Orden de columnas de materialized_view (relevante para operaciones bulk).
MATERIALIZED_VIEW_COLUMNS = (
    "id",
    "created_on",
    "danger_level",
    "event_stream",
    "humidity",
    "latency_ms",
    "processed_on",
    "sensor_id",
    "temperature",
)


def ensure_schema(conn: Connection) -> None:
    """Crea event_store y materialized_view si no existen (no es una migración)."""
    conn.execute(
        text(
            f"""
            CREATE TABLE IF NOT EXISTS {EVENT_STORE_TABLE} (
              id BIGINT PRIMARY KEY,
              created_on TIMESTAMP NOT NULL,
              event_stream VARCHAR(255) NOT NULL,
              humidity DOUBLE PRECISION NOT NULL,
              processed_on TIMESTAMP NOT NULL,
              sensor_id BIGINT NOT NULL,
              temperature DOUBLE PRECISION NOT NULL
            )
            """
        )
    )
    conn.execute(
        text(
            f"""
            CREATE TABLE IF NOT EXISTS {MATERIALIZED_VIEW_TABLE} (
              id BIGINT PRIMARY KEY,
              created_on TIMESTAMP NOT NULL,
              danger_level VARCHAR(16) NOT NULL,
              event_stream VARCHAR(255) NOT NULL,
              humidity DOUBLE PRECISION NOT NULL,
              latency_ms DOUBLE PRECISION NOT NULL,
              processed_on TIMESTAMP NOT NULL,
              sensor_id BIGINT NOT NULL,
              temperature DOUBLE PRECISION NOT NULL
            )
            """
        )
    )


def delete_materialized_view(conn: Connection) -> int:
    result = conn.execute(text(f"DELETE FROM {MATERIALIZED_VIEW_TABLE}"))
    return result.rowcount


def select_measurements(conn: Connection) -> Sequence[RowMapping]:
    # Orden por id: corridas repetidas deben ser comparables.
    stmt = text(
        f"""
        SELECT id, created_on, event_stream, humidity, processed_on, sensor_id, temperature
        FROM {EVENT_STORE_TABLE}
        ORDER BY id ASC
        """
    ).columns(created_on=DateTime, processed_on=DateTime)
    return conn.execute(stmt).mappings().all()


_INSERT_MATERIALIZED = text(
    f"""
    INSERT INTO {MATERIALIZED_VIEW_TABLE} ({", ".join(MATERIALIZED_VIEW_COLUMNS)})
    VALUES ({", ".join(":" + c for c in MATERIALIZED_VIEW_COLUMNS)})
    """
).bindparams(
    bindparam("created_on", type_=DateTime),
    bindparam("processed_on", type_=DateTime),
)


def insert_materialized_row(conn: Connection, params: Mapping[str, Any]) -> None:
    conn.execute(_INSERT_MATERIALIZED, dict(params))


def select_materialized_rows(conn: Connection) -> Sequence[RowMapping]:
    stmt = text(
        f"""
        SELECT {", ".join(MATERIALIZED_VIEW_COLUMNS)}
        FROM {MATERIALIZED_VIEW_TABLE}
        ORDER BY id ASC
        """
    ).columns(created_on=DateTime, processed_on=DateTime)
    return conn.execute(stmt).mappings().all()

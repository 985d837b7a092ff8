"""Fixtures compartidos para los tests del materializer."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest
from sqlalchemy import DateTime, bindparam, create_engine, text
from sqlalchemy.engine import Engine

from jobs.materializer.db_queries import EVENT_STORE_TABLE, ensure_schema
from jobs.materializer.models import Measurement

BASE_TS = datetime(2024, 1, 15, 8, 0, 0)

_INSERT_EVENT = text(
    f"""
    INSERT INTO {EVENT_STORE_TABLE}
      (id, created_on, event_stream, humidity, processed_on, sensor_id, temperature)
    VALUES
      (:id, :created_on, :event_stream, :humidity, :processed_on, :sensor_id, :temperature)
    """
).bindparams(
    bindparam("created_on", type_=DateTime),
    bindparam("processed_on", type_=DateTime),
)


def make_measurement(
    id: int = 1,
    temperature: float = 0.0,
    humidity: float = 0.0,
    latency: timedelta = timedelta(milliseconds=12),
    sensor_id: int = 7,
    event_stream: str = "kafka",
) -> Measurement:
    created_on = BASE_TS + timedelta(seconds=id)
    return Measurement(
        id=id,
        sensor_id=sensor_id,
        temperature=temperature,
        humidity=humidity,
        event_stream=event_stream,
        created_on=created_on,
        processed_on=created_on + latency,
    )


@pytest.fixture
def measurement_factory() -> Callable[..., Measurement]:
    return make_measurement


@pytest.fixture
def engine(tmp_path) -> Engine:
    """SQLite en archivo: cada operación del writer abre su propia conexión."""
    eng = create_engine(f"sqlite:///{tmp_path / 'materializer.db'}", future=True)
    with eng.begin() as conn:
        ensure_schema(conn)
    yield eng
    eng.dispose()


@pytest.fixture
def seed_events(engine) -> Callable[[list[Measurement]], None]:
    def _seed(measurements: list[Measurement]) -> None:
        with engine.begin() as conn:
            for m in measurements:
                conn.execute(
                    _INSERT_EVENT,
                    {
                        "id": m.id,
                        "created_on": m.created_on,
                        "event_stream": m.event_stream,
                        "humidity": m.humidity,
                        "processed_on": m.processed_on,
                        "sensor_id": m.sensor_id,
                        "temperature": m.temperature,
                    },
                )

    return _seed

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings, get_settings


logger = logging.getLogger(__name__)


def build_sqlalchemy_url(settings: Settings) -> URL | str:
    if settings.database_url:
        return settings.database_url

    # URL.create escapa usuario/contraseña con caracteres especiales.
    return URL.create(
        settings.db_driver,
        username=settings.db_user,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def get_engine(settings: Optional[Settings] = None, check_connection: bool = True) -> Engine:
    settings = settings or get_settings()
    url = build_sqlalchemy_url(settings)

    # Log básico de parámetros de conexión (sin contraseña)
    if settings.database_url:
        logger.info("[DB] Crear engine url=%s", _safe_url(url))
    else:
        logger.info(
            "[DB] Crear engine host=%s port=%s db=%s user=%s driver=%s",
            settings.db_host,
            settings.db_port,
            settings.db_name,
            settings.db_user,
            settings.db_driver,
        )

    engine = create_engine(url, pool_pre_ping=True, future=True)

    if check_connection:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("[DB] Test de conexión OK")
        except SQLAlchemyError:
            logger.exception("[DB] Test de conexión FALLÓ")
            engine.dispose()
            raise

    return engine


def _safe_url(url: URL | str) -> str:
    return make_url(url).render_as_string(hide_password=True)

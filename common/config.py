from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _default_env_file() -> str:
    # .env del directorio de trabajo (donde se lanza el job).
    return str(Path.cwd() / ".env")


@dataclass(frozen=True)
class Settings:
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str

    db_driver: str
    database_url: Optional[str]

    progress_every: int
    log_level: str


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("MATERIALIZER_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    db_host = os.getenv("DB_HOST", "localhost")
    db_port = int(os.getenv("DB_PORT", "5432"))
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "")
    db_name = os.getenv("DB_DATABASE", "measurements")

    # SQLAlchemy dialect+driver. DATABASE_URL gana sobre todo lo demás
    # (útil para SQLite en local).
    db_driver = os.getenv("DB_DRIVER", "postgresql+psycopg2")
    database_url = os.getenv("DATABASE_URL") or None

    progress_every = int(os.getenv("MATERIALIZER_PROGRESS_EVERY", "1000"))
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    return Settings(
        db_host=db_host,
        db_port=db_port,
        db_user=db_user,
        db_password=db_password,
        db_name=db_name,
        db_driver=db_driver,
        database_url=database_url,
        progress_every=progress_every,
        log_level=log_level,
    )

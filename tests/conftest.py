from __future__ import annotations

import os
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def postgres_url() -> str:
    from testcontainers.postgres import PostgresContainer

    try:
        container = PostgresContainer("postgres:16")
        container.start()
    except Exception as exc:  # docker daemon missing or unreachable
        pytest.skip(f"postgres container unavailable: {exc}")
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest.fixture(scope="session")
def migrated_db(postgres_url: str) -> str:
    from alembic import command
    from alembic.config import Config

    # Normalize testcontainers URL (may be postgresql:// or postgresql+psycopg2://).
    base = postgres_url.replace("postgresql+psycopg2://", "postgresql://")
    sync_url = base.replace("postgresql://", "postgresql+psycopg://")

    alembic_ini = str(REPO_ROOT / "db" / "migrations" / "alembic.ini")
    cfg = Config(alembic_ini)
    os.environ["DATABASE_URL"] = sync_url
    command.upgrade(cfg, "head")
    return sync_url

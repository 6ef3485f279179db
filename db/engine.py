from __future__ import annotations

import sqlalchemy as sa


def enable_sqlite_foreign_keys(engine: sa.Engine) -> None:
    """SQLite ships with foreign keys off; turn them on for every new DBAPI connection."""

    @sa.event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_conn, connection_record) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(database_url: str) -> sa.Engine:
    engine = sa.create_engine(database_url, future=True)
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)
    return engine

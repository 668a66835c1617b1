# student_registry/database/session.py
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker


def ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database"""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def build_engine(database_url: str, wal: bool = True) -> Engine:
    """
    Create an engine for the record store.

    For SQLite the driver's implicit transaction handling is switched off and
    BEGIN is emitted explicitly, so SAVEPOINTs nest correctly inside the bulk
    import transaction. Foreign keys are enforced on every connection.
    """
    engine = create_engine(database_url)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            if wal:
                cursor.execute("PRAGMA journal_mode = WAL")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    # Rows stay readable after the session that loaded them is closed
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_store(request: Request):
    """FastAPI dependency returning the store opened by the app lifespan"""
    return request.app.state.store

"""
core/db.py -- SQLAlchemy engine factory shared by every DesignDesk store.

Each repository (UserStore, ProjectStore, OptionStore) owns its own Table
definitions and calls make_engine() with the configured DATABASE_URL. Swapping
SQLite for PostgreSQL is a connection string change, not a rewrite.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    WAL (Write-Ahead Logging) allows readers to proceed without blocking
    during writes. Set per-connection because SQLite PRAGMAs are not
    inherited by new connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Create an engine, applying the SQLite-only connection settings.

    check_same_thread=False: FastAPI runs sync handlers in a thread pool, so a
    pooled connection may be used from a different thread than the one that
    opened it.
    """
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
    return engine

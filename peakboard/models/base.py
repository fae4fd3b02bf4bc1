"""
SQLAlchemy engine and session management for the flight store.

The database backs DatabaseFlightLogSource and the seeding command. The
in-memory FlightLogCache sits in front of it, so queries here are
per-airport bulk loads rather than per-request lookups.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from peakboard.config import config


class Base(DeclarativeBase):
    pass


def _configure_sqlite(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.execute('PRAGMA synchronous=NORMAL')
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the flight store.

    SQLite connections are shared between request threads and the cache's
    source workers, and run in WAL mode so seeding does not block reads.
    """
    if url.startswith('sqlite'):
        sqlite_engine = create_engine(
            url,
            echo=echo,
            connect_args={'check_same_thread': False},
        )
        event.listen(sqlite_engine, 'connect', _configure_sqlite)
        return sqlite_engine
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine(config.database.url, echo=config.debug)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def get_session() -> Iterator[Session]:
    """
    Transactional scope for writes.

    Commits when the block exits cleanly, rolls back and re-raises
    otherwise. Read-only callers use SessionLocal() directly.
    """
    with SessionLocal() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def init_db() -> None:
    """Create the flights and airports tables if they are missing."""
    Base.metadata.create_all(bind=engine)

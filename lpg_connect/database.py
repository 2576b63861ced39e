"""Database engine construction and the declarative base."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(database_url: str, **kwargs):
    """Create a SQLAlchemy engine with appropriate configuration.

    SQLite only enforces the applications -> users foreign key when the
    pragma is switched on for every new connection.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, connect_args=connect_args, **kwargs)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass

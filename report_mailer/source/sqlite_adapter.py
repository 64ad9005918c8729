# Path: report_mailer/source/sqlite_adapter.py
"""
SQLite Data Source

Embedded-file backend. The database file is opened read-only through
a `file:...?mode=ro` URI, so a report can never create or modify it.

Accepted connection strings:
    /path/to/reports.db
    sqlite:///relative/reports.db
    sqlite:////absolute/reports.db
    :memory:                      (empty in-memory database)
"""

import sqlite3
from functools import partial
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ..core.logger import get_input_logger
from ..exceptions import SourceConnectionError
from .base import RawResult, SourceKind, fetch_rows, release


logger = get_input_logger('sqlite')

MEMORY = ':memory:'
URL_PREFIX = 'sqlite:///'


def resolve_sqlite_path(connection_string: str) -> str:
    """
    Turn a connection string into a filesystem path (or ':memory:').

    Raises:
        SourceConnectionError: If the string is empty
    """
    value = (connection_string or '').strip()
    if value.startswith(URL_PREFIX):
        value = value[len(URL_PREFIX):]
    elif value == 'sqlite://':
        value = MEMORY
    if not value:
        raise SourceConnectionError("Empty SQLite connection string")
    return value


class SqliteAdapter:
    """
    SQLite backend on a SQLAlchemy engine.

    Example:
        adapter = SqliteAdapter()
        conn = adapter.connect('sales.db')
        rows = adapter.execute(conn, 'SELECT name, qt FROM sales')
        adapter.close(conn)
    """

    kind = SourceKind.SQLITE

    def connect(self, connection_string: str) -> Connection:
        """
        Open the database file read-only.

        Raises:
            SourceConnectionError: If the file does not exist or cannot
                be opened as a SQLite database
        """
        target = resolve_sqlite_path(connection_string)

        if target == MEMORY:
            creator = partial(sqlite3.connect, MEMORY, check_same_thread=False)
        else:
            path = Path(target).expanduser().resolve()
            if not path.is_file():
                raise SourceConnectionError(f"SQLite database not found: {path}")
            uri = f"{path.as_uri()}?mode=ro"
            creator = partial(sqlite3.connect, uri, uri=True, check_same_thread=False)

        engine = create_engine('sqlite://', creator=creator, poolclass=StaticPool)
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            engine.dispose()
            raise SourceConnectionError(f"Cannot open SQLite database {target}: {e}") from e

        logger.info(f"SQLite database opened: {target}")
        return connection

    def execute(self, connection: Connection, sql: str) -> RawResult:
        return fetch_rows(connection, sql)

    def close(self, connection: Connection) -> None:
        release(connection)


__all__ = ['SqliteAdapter', 'resolve_sqlite_path']

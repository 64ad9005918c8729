# Path: report_mailer/source/base.py
"""
Data Source Contract

Every backend kind implements the same three calls; the rest of the
pipeline never sees a backend-specific type.

    connect(connection_string) -> Connection   (SourceConnectionError)
    execute(connection, sql)   -> RawResult    (QueryError)
    close(connection)

A RawResult carries the column names of the result set, known even
when no row comes back, and its rows. A RawRow maps column name to the
backend-native value.

Scoped acquisition:
    open_connection() opens exactly one connection for a run and
    releases it on every exit path.
"""

import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generator, List, Protocol, Tuple

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..constants import READ_ONLY_KEYWORDS
from ..core.logger import get_input_logger
from ..exceptions import QueryError


logger = get_input_logger('source')

RawRow = Dict[str, Any]


@dataclass(frozen=True)
class RawResult:
    """Untyped result of one statement."""
    columns: Tuple[str, ...]
    rows: List[RawRow] = field(default_factory=list)


# Leading SQL comments and whitespace
_LEADING_NOISE = re.compile(r'^(\s+|--[^\n]*(\n|$)|/\*.*?\*/)+', re.DOTALL)
_FIRST_WORD = re.compile(r'^\(*\s*([A-Za-z]+)')


class SourceKind(str, Enum):
    """Closed set of supported backends."""
    SQLITE = 'Sqlite'
    POSTGRES = 'Postgres'


class DataSourceAdapter(Protocol):
    """Capability interface shared by all backends."""

    kind: SourceKind

    def connect(self, connection_string: str) -> Connection:
        ...

    def execute(self, connection: Connection, sql: str) -> RawResult:
        ...

    def close(self, connection: Connection) -> None:
        ...


def check_read_only(sql: str) -> str:
    """
    Reject statements that could modify data.

    Args:
        sql: SQL text as declared in the report definition

    Returns:
        The SQL text unchanged

    Raises:
        QueryError: If the statement is empty or does not start with
            SELECT, WITH or VALUES
    """
    body = _LEADING_NOISE.sub('', sql or '')
    match = _FIRST_WORD.match(body)
    if match is None or match.group(1).lower() not in READ_ONLY_KEYWORDS:
        raise QueryError("Only read-only SELECT/WITH/VALUES statements are allowed", sql=sql)
    return sql


def fetch_rows(connection: Connection, sql: str) -> RawResult:
    """
    Execute read-only SQL on an open SQLAlchemy connection.

    The statement is sent to the driver as-is (no bind parameter
    parsing). Column names come from the cursor description, so they
    are available for an empty result too; rows come back as plain
    dicts in backend order.

    Raises:
        QueryError: If the guard rejects the SQL or the backend fails
    """
    check_read_only(sql)
    try:
        result = connection.exec_driver_sql(sql, execution_options={'no_parameters': True})
        if not result.returns_rows:
            raise QueryError("Statement returned no result set", sql=sql)
        columns = tuple(result.keys())
        return RawResult(columns=columns, rows=[dict(row) for row in result.mappings()])
    except SQLAlchemyError as e:
        cause = getattr(e, 'orig', None) or e
        raise QueryError(f"Query failed: {cause}", sql=sql) from e


def release(connection: Connection) -> None:
    """Close a connection and dispose of its engine."""
    engine = connection.engine
    try:
        connection.close()
    finally:
        engine.dispose()


@contextmanager
def open_connection(
    adapter: DataSourceAdapter,
    connection_string: str,
) -> Generator[Connection, None, None]:
    """
    Hold one backend connection for the duration of a run.

    Args:
        adapter: Backend adapter
        connection_string: Backend-specific connection string

    Yields:
        Open connection

    Example:
        with open_connection(SqliteAdapter(), 'reports.db') as conn:
            rows = adapter.execute(conn, 'SELECT 1 AS one')
    """
    connection = adapter.connect(connection_string)
    logger.debug(f"Opened {adapter.kind.value} connection")
    try:
        yield connection
    finally:
        adapter.close(connection)
        logger.debug(f"Released {adapter.kind.value} connection")


__all__ = [
    'RawRow',
    'RawResult',
    'SourceKind',
    'DataSourceAdapter',
    'check_read_only',
    'fetch_rows',
    'release',
    'open_connection',
]

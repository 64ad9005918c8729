# Path: report_mailer/source/__init__.py
"""
Data Source Package for report_mailer

One adapter per backend kind behind a shared contract:

    SqliteAdapter   - embedded database file (read-only)
    PostgresAdapter - networked PostgreSQL server

Usage:
    from report_mailer.source import SourceKind, get_adapter, open_connection

    adapter = get_adapter(SourceKind.SQLITE)
    with open_connection(adapter, 'sales.db') as conn:
        rows = adapter.execute(conn, 'SELECT * FROM sales').rows
"""

from .base import (
    RawRow,
    RawResult,
    SourceKind,
    DataSourceAdapter,
    check_read_only,
    open_connection,
)
from .sqlite_adapter import SqliteAdapter
from .postgres_adapter import PostgresAdapter


_ADAPTERS = {
    SourceKind.SQLITE: SqliteAdapter,
    SourceKind.POSTGRES: PostgresAdapter,
}


def get_adapter(kind: SourceKind) -> DataSourceAdapter:
    """
    Create the adapter for a backend kind.

    Args:
        kind: SourceKind (or its string value, e.g. 'Sqlite')

    Returns:
        New adapter instance
    """
    return _ADAPTERS[SourceKind(kind)]()


__all__ = [
    'RawRow',
    'RawResult',
    'SourceKind',
    'DataSourceAdapter',
    'check_read_only',
    'open_connection',
    'get_adapter',
    'SqliteAdapter',
    'PostgresAdapter',
]

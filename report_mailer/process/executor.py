# Path: report_mailer/process/executor.py
"""
Query Executor

Runs declared queries against one open connection and turns the raw
rows into typed ResultSets.

Column alignment:
    Declared fields are matched to result columns by exact,
    case-sensitive name. Extra columns are ignored; a declared field
    with no column is a configuration error. Row order is kept exactly
    as the backend returned it.

Failure policy:
    Any failure aborts the query (and the run). No partial ResultSet
    is ever returned.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..core.logger import DiagnosticSink, LoggingSink
from ..exceptions import ConfigurationError
from ..source import DataSourceAdapter, RawRow, open_connection
from .caster import cast_field
from .models import QuerySpec, ResultSet, Row


class QueryExecutor:
    """
    Executes QuerySpecs through a data source adapter.

    Example:
        executor = QueryExecutor(SqliteAdapter())
        results = executor.run_all('sales.db', queries)
    """

    def __init__(
        self,
        adapter: DataSourceAdapter,
        sink: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize executor.

        Args:
            adapter: Backend adapter used for every query
            sink: Diagnostic sink (defaults to LoggingSink)
        """
        self.adapter = adapter
        self.sink = sink if sink is not None else LoggingSink('query_executor')

    def run(self, connection: Any, query: QuerySpec) -> ResultSet:
        """
        Execute one query and cast every declared field.

        Args:
            connection: Open connection from the adapter
            query: Query to run

        Returns:
            ResultSet with one typed row per backend row

        Raises:
            QueryError: If the backend rejects the SQL
            ConfigurationError: If a declared field has no matching column
            TypeMismatchError: If a cell does not fit its declared kind
        """
        self.sink.emit('query.started', title=query.title)
        raw = self.adapter.execute(connection, query.sql)
        self._check_columns(query, raw.columns)

        rows = tuple(self._cast_row(query, row, index) for index, row in enumerate(raw.rows))
        result = ResultSet(fields=query.fields, rows=rows)

        self.sink.emit('query.finished', title=query.title, rows=len(result))
        return result

    def run_all(
        self,
        connection_string: str,
        queries: Sequence[QuerySpec],
    ) -> List[ResultSet]:
        """
        Run all queries in declaration order on one shared connection.

        If the connection cannot be opened, no query runs. The
        connection is released whether the run succeeds or fails.

        Args:
            connection_string: Backend connection string
            queries: Queries in declaration order

        Returns:
            One ResultSet per query, same order
        """
        results = []
        with open_connection(self.adapter, connection_string) as connection:
            self.sink.emit('source.connected', kind=self.adapter.kind.value)
            try:
                for query in queries:
                    results.append(self.run(connection, query))
            finally:
                self.sink.emit('source.released', kind=self.adapter.kind.value, level=logging.DEBUG)
        return results

    def _check_columns(self, query: QuerySpec, columns: Sequence[str]) -> None:
        missing = [spec.name for spec in query.fields if spec.name not in columns]
        if missing:
            available = ', '.join(columns) or '(none)'
            raise ConfigurationError(
                f"Query '{query.title}': declared field(s) {', '.join(missing)} "
                f"not in result columns: {available}"
            )

    def _cast_row(self, query: QuerySpec, raw: RawRow, index: int) -> Row:
        return tuple(cast_field(raw[spec.name], spec, index) for spec in query.fields)


__all__ = ['QueryExecutor']

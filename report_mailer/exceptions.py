# Path: report_mailer/exceptions.py
"""
Error Taxonomy

Exceptions raised by the report pipeline. Every stage raises a
subclass of ReportError so the runner can abort the whole run on
the first fatal failure.

Classification:
    SourceConnectionError - backend unreachable or authentication failed
    QueryError            - malformed SQL or backend execution failure
    ConfigurationError    - report definition does not match the data
    TypeMismatchError     - declared field kind disagrees with the data
    RenderError           - output serialization failed
    DeliveryError         - terminal or mail delivery failed
"""

from typing import Any, Optional


class ReportError(Exception):
    """Base class for all report pipeline failures."""


class SourceConnectionError(ReportError):
    """Data source could not be opened."""


class QueryError(ReportError):
    """SQL statement was rejected or failed on the backend."""

    def __init__(self, message: str, sql: Optional[str] = None):
        super().__init__(message)
        self.sql = sql


class ConfigurationError(ReportError):
    """Report definition is invalid or references unknown columns."""


class TypeMismatchError(ReportError):
    """
    A value does not fit the kind declared for its field.

    Attributes:
        field: Field name (None when casting outside a query)
        row_index: Zero-based row index (None when unknown)
        raw_value: The offending value as received
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        row_index: Optional[int] = None,
        raw_value: Any = None,
    ):
        self.reason = message
        self.field = field
        self.row_index = row_index
        self.raw_value = raw_value
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = []
        if self.field is not None:
            parts.append(f"field '{self.field}'")
        if self.row_index is not None:
            parts.append(f"row {self.row_index}")
        location = ', '.join(parts)
        if location:
            return f"{location}: {self.reason} (value: {self.raw_value!r})"
        return f"{self.reason} (value: {self.raw_value!r})"

    def with_location(self, field: str, row_index: int) -> 'TypeMismatchError':
        """Return a copy of this error bound to a field and row."""
        return TypeMismatchError(
            self.reason,
            field=field,
            row_index=row_index,
            raw_value=self.raw_value,
        )


class RenderError(ReportError):
    """Document could not be serialized to the requested format."""


class DeliveryError(ReportError):
    """Rendered payload could not be delivered."""


__all__ = [
    'ReportError',
    'SourceConnectionError',
    'QueryError',
    'ConfigurationError',
    'TypeMismatchError',
    'RenderError',
    'DeliveryError',
]

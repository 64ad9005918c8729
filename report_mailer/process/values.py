# Path: report_mailer/process/values.py
"""
Value Model

Backend-agnostic typed cell values. Data source adapters hand raw
backend values to the field caster, which produces Value instances;
everything downstream (assembler, formatters) works only with Values.

Design:
    Value is a small tagged union: a ValueTag plus the Python payload.
    FieldKind is what the user declares; ValueTag is what a cell holds.
    A field of a given kind only ever produces values of one tag,
    or NULL.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from ..exceptions import TypeMismatchError


Number = Union[int, Decimal, float]


class FieldKind(str, Enum):
    """Declared kind of a query output field."""
    STRING = "String"
    INTEGER = "Integer"
    DECIMAL = "Decimal"
    FLOAT = "Float"
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    BOOLEAN = "Boolean"
    IDENTIFIER = "Identifier"


class ValueTag(Enum):
    """Tag carried by a Value."""
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    FLOAT = "float"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    NULL = "null"


# Tag produced by each declared kind
KIND_TAGS = {
    FieldKind.STRING: ValueTag.TEXT,
    FieldKind.INTEGER: ValueTag.INTEGER,
    FieldKind.DECIMAL: ValueTag.DECIMAL,
    FieldKind.FLOAT: ValueTag.FLOAT,
    FieldKind.DATE: ValueTag.DATE,
    FieldKind.TIME: ValueTag.TIME,
    FieldKind.DATETIME: ValueTag.DATETIME,
    FieldKind.BOOLEAN: ValueTag.BOOLEAN,
    FieldKind.IDENTIFIER: ValueTag.IDENTIFIER,
}

NUMERIC_TAGS = frozenset({ValueTag.INTEGER, ValueTag.DECIMAL, ValueTag.FLOAT})


@dataclass(frozen=True)
class Value:
    """
    Single typed cell.

    Attributes:
        tag: ValueTag describing the payload
        data: Python payload (None for NULL)
    """
    tag: ValueTag
    data: Any = None

    @classmethod
    def null(cls) -> 'Value':
        return cls(ValueTag.NULL, None)

    @classmethod
    def text(cls, data: str) -> 'Value':
        return cls(ValueTag.TEXT, data)

    @classmethod
    def integer(cls, data: int) -> 'Value':
        return cls(ValueTag.INTEGER, data)

    @classmethod
    def decimal(cls, data: Decimal) -> 'Value':
        return cls(ValueTag.DECIMAL, data)

    @classmethod
    def floating(cls, data: float) -> 'Value':
        return cls(ValueTag.FLOAT, data)

    @classmethod
    def date(cls, data: date) -> 'Value':
        return cls(ValueTag.DATE, data)

    @classmethod
    def time(cls, data: time) -> 'Value':
        return cls(ValueTag.TIME, data)

    @classmethod
    def datetime(cls, data: datetime) -> 'Value':
        return cls(ValueTag.DATETIME, data)

    @classmethod
    def boolean(cls, data: bool) -> 'Value':
        return cls(ValueTag.BOOLEAN, data)

    @classmethod
    def identifier(cls, data: uuid.UUID) -> 'Value':
        return cls(ValueTag.IDENTIFIER, data)

    @property
    def is_null(self) -> bool:
        return self.tag is ValueTag.NULL

    @property
    def is_numeric(self) -> bool:
        return self.tag in NUMERIC_TAGS

    def as_number(self) -> Number:
        """
        Return the numeric payload.

        Raises:
            TypeMismatchError: If the value is not Integer, Decimal or Float
        """
        if not self.is_numeric:
            raise TypeMismatchError(
                f"expected a numeric value, got {self.tag.value}",
                raw_value=self.data,
            )
        return self.data

    def display(self) -> str:
        """Stable text form used by formatters and chart categories."""
        if self.tag is ValueTag.NULL:
            return ''
        if self.tag is ValueTag.BOOLEAN:
            return 'true' if self.data else 'false'
        if self.tag is ValueTag.DECIMAL:
            return format(self.data, 'f')
        if self.tag is ValueTag.DATETIME:
            return self.data.isoformat(sep=' ')
        if self.tag in (ValueTag.DATE, ValueTag.TIME):
            return self.data.isoformat()
        return str(self.data)

    def __str__(self) -> str:
        return self.display()


__all__ = [
    'FieldKind',
    'ValueTag',
    'Value',
    'KIND_TAGS',
    'NUMERIC_TAGS',
    'Number',
]

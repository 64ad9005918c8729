# Path: report_mailer/process/__init__.py
"""
Process Module for report_mailer

Turns raw backend rows into typed result sets.

    Value model  - FieldKind, ValueTag, Value
    Field caster - cast(), cast_field()
    Executor     - QueryExecutor runs declared queries on one connection
"""

from .values import FieldKind, ValueTag, Value
from .models import (
    ChartKind,
    FieldSpec,
    SeriesBy,
    ChartSpec,
    QuerySpec,
    ResultSet,
)
from .caster import cast, cast_field
from .executor import QueryExecutor

__all__ = [
    'FieldKind',
    'ValueTag',
    'Value',
    'ChartKind',
    'FieldSpec',
    'SeriesBy',
    'ChartSpec',
    'QuerySpec',
    'ResultSet',
    'cast',
    'cast_field',
    'QueryExecutor',
]

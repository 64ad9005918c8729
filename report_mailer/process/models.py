# Path: report_mailer/process/models.py
"""
Query Models

Immutable descriptions of what to query and the typed results.
Built once from the report definition; read-only afterwards.

    QuerySpec  - title, SQL and declared output fields (+ optional chart)
    ResultSet  - declared fields plus typed rows, one per backend row
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple

from .values import FieldKind, Value


class ChartKind(str, Enum):
    """Supported chart kinds."""
    BAR = "Bar"
    LINE = "Line"
    PIZZA = "Pizza"


@dataclass(frozen=True)
class FieldSpec:
    """
    Declared output column of a query.

    Attributes:
        name: Column alias in the SQL result (case-sensitive)
        title: Display title used in tables and chart legends
        kind: Declared FieldKind
    """
    name: str
    title: str
    kind: FieldKind


@dataclass(frozen=True)
class SeriesBy:
    """
    Pivot specification for charts.

    Distinct values of `key` become series names; `values` supplies
    the magnitude for each (category, series) pair.
    """
    key: str
    values: str


@dataclass(frozen=True)
class ChartSpec:
    """
    Chart attached to a query.

    Attributes:
        kind: ChartKind
        keys_by: Field whose values become the categories
        series: Field names plotted as one series each
        series_by: Pivot specification (alternative to series)
    """
    kind: ChartKind
    keys_by: str
    series: Tuple[str, ...] = ()
    series_by: Optional[SeriesBy] = None

    def referenced_fields(self) -> Tuple[str, ...]:
        """All field names this chart depends on."""
        names = [self.keys_by, *self.series]
        if self.series_by is not None:
            names.extend([self.series_by.key, self.series_by.values])
        return tuple(names)


@dataclass(frozen=True)
class QuerySpec:
    """One declared query of a report."""
    title: str
    sql: str
    fields: Tuple[FieldSpec, ...]
    chart: Optional[ChartSpec] = None

    def field_index(self, name: str) -> int:
        """
        Position of a field by name.

        Raises:
            KeyError: If no field has that name
        """
        for index, spec in enumerate(self.fields):
            if spec.name == name:
                return index
        raise KeyError(name)

    def get_field(self, name: str) -> FieldSpec:
        return self.fields[self.field_index(name)]


Row = Tuple[Value, ...]


@dataclass(frozen=True)
class ResultSet:
    """
    Typed output of one executed query.

    Every row holds exactly one Value per field, in field order.
    """
    fields: Tuple[FieldSpec, ...]
    rows: Tuple[Row, ...] = field(default_factory=tuple)

    def __post_init__(self):
        width = len(self.fields)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {index} has {len(row)} values, expected {width}"
                )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows


__all__ = [
    'ChartKind',
    'FieldSpec',
    'SeriesBy',
    'ChartSpec',
    'QuerySpec',
    'Row',
    'ResultSet',
]

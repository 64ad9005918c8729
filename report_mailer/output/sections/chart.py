# Path: report_mailer/output/sections/chart.py
"""
Chart Section Producer

Aggregates a ResultSet into categories and numeric series when the
query declares a chart.

Grouping:
    Categories are the distinct display strings of the keys_by field,
    in first-seen order (NULL becomes the empty string).

Series variants:
    series     - one series per listed field, named after its title
    series_by  - distinct values of series_by.key become series names;
                 series_by.values supplies the magnitudes

A repeated key overwrites the earlier magnitude (last write wins).
NULL magnitudes and absent (category, series) pairs become CHART_ZERO.
A non-numeric magnitude raises TypeMismatchError naming the field and
row.
"""

from typing import Dict, List, Tuple

from ...constants import CHART_ZERO
from ...exceptions import ConfigurationError, TypeMismatchError
from ...process.models import ChartSpec, QuerySpec, ResultSet
from ...process.values import Number, Value
from ..report_models import ChartSection, NamedSeries, Section
from .base_section import BaseSection


def _magnitude(value: Value, field_name: str, row_index: int) -> Number:
    """Numeric payload of a chart cell."""
    if value.is_null:
        return CHART_ZERO
    if not value.is_numeric:
        raise TypeMismatchError(
            f"chart series expects a number, got {value.tag.value}",
            field=field_name,
            row_index=row_index,
            raw_value=value.data,
        )
    return value.as_number()


def _first_seen(labels: List[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(labels))


class ChartSectionProducer(BaseSection):
    """Emits one ChartSection for queries that declare a chart."""

    @property
    def section_type(self) -> str:
        return 'chart'

    def produce(self, query: QuerySpec, result_set: ResultSet) -> List[Section]:
        chart = query.chart
        if chart is None:
            return []

        try:
            key_index = query.field_index(chart.keys_by)
        except KeyError:
            raise ConfigurationError(
                f"Query '{query.title}': chart keys_by '{chart.keys_by}' is not a declared field"
            ) from None

        keys = [row[key_index].display() for row in result_set.rows]
        categories = _first_seen(keys)

        if chart.series_by is not None:
            series = self._pivot(query, chart, result_set, keys, categories)
        else:
            series = self._project(query, chart, result_set, keys, categories)

        return [ChartSection(
            kind=chart.kind,
            title=query.title,
            categories=categories,
            series=series,
        )]

    def _field_index(self, query: QuerySpec, name: str) -> int:
        try:
            return query.field_index(name)
        except KeyError:
            raise ConfigurationError(
                f"Query '{query.title}': chart field '{name}' is not a declared field"
            ) from None

    def _project(
        self,
        query: QuerySpec,
        chart: ChartSpec,
        result_set: ResultSet,
        keys: List[str],
        categories: Tuple[str, ...],
    ) -> Tuple[NamedSeries, ...]:
        """One series per listed field."""
        series = []
        for name in chart.series:
            index = self._field_index(query, name)
            by_key: Dict[str, Number] = {}
            for row_index, (key, row) in enumerate(zip(keys, result_set.rows)):
                by_key[key] = _magnitude(row[index], name, row_index)
            series.append(NamedSeries(
                name=query.fields[index].title,
                values=tuple(by_key.get(category, CHART_ZERO) for category in categories),
            ))
        return tuple(series)

    def _pivot(
        self,
        query: QuerySpec,
        chart: ChartSpec,
        result_set: ResultSet,
        keys: List[str],
        categories: Tuple[str, ...],
    ) -> Tuple[NamedSeries, ...]:
        """Distinct values of one field become the series."""
        name_index = self._field_index(query, chart.series_by.key)
        value_index = self._field_index(query, chart.series_by.values)

        names = [row[name_index].display() for row in result_set.rows]
        grid: Dict[Tuple[str, str], Number] = {}
        for row_index, (key, name, row) in enumerate(zip(keys, names, result_set.rows)):
            grid[(key, name)] = _magnitude(row[value_index], chart.series_by.values, row_index)

        return tuple(
            NamedSeries(
                name=name,
                values=tuple(grid.get((category, name), CHART_ZERO) for category in categories),
            )
            for name in _first_seen(names)
        )


__all__ = ['ChartSectionProducer']

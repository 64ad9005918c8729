# Path: report_mailer/output/report_models.py
"""
Report Data Models

Format-agnostic data structures for report generation.
Section producers create these models; formatters consume them.

Design:
    A Document is an ordered list of QueryReports, each holding the
    sections produced for one query. Two section kinds exist:
    TableSection (the typed rows verbatim) and ChartSection (categories
    plus numeric series aligned by category index). All models are
    frozen so nothing changes once rendering starts.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

from ..constants import OutputFormat, PAYLOAD_ENCODING
from ..process.models import ChartKind, FieldSpec, Row
from ..process.values import Number


@dataclass(frozen=True)
class TableSection:
    """
    Tabular rendering of a ResultSet.

    Attributes:
        fields: Declared fields (column headers use their titles)
        rows: Typed rows, same order as the ResultSet
    """
    fields: Tuple[FieldSpec, ...]
    rows: Tuple[Row, ...] = ()

    section_type = 'table'

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class NamedSeries:
    """One chart series: a name and one magnitude per category."""
    name: str
    values: Tuple[Number, ...]


@dataclass(frozen=True)
class ChartSection:
    """
    Chart-ready aggregation of a ResultSet.

    Attributes:
        kind: Bar, Line or Pizza
        title: Chart title (the query title)
        categories: Distinct key values in first-seen order
        series: Series aligned with categories
    """
    kind: ChartKind
    title: str
    categories: Tuple[str, ...]
    series: Tuple[NamedSeries, ...]

    section_type = 'chart'

    def __post_init__(self):
        width = len(self.categories)
        for named in self.series:
            if len(named.values) != width:
                raise ValueError(
                    f"Series '{named.name}' has {len(named.values)} values "
                    f"for {width} categories"
                )


Section = Union[TableSection, ChartSection]


@dataclass(frozen=True)
class QueryReport:
    """Sections produced for one query, under the query title."""
    title: str
    sections: Tuple[Section, ...] = ()


@dataclass(frozen=True)
class Document:
    """
    Complete report ready for rendering.

    Attributes:
        title: Report title from the definition
        queries: One QueryReport per declared query, in order
    """
    title: str
    queries: Tuple[QueryReport, ...] = ()


@dataclass(frozen=True)
class InlineImage:
    """
    Image embedded in a rendered payload.

    The cid is derived from the image bytes, so identical charts get
    identical ids across runs.
    """
    cid: str
    mime: str
    data: bytes


@dataclass(frozen=True)
class RenderedPayload:
    """Serialized document plus the images it embeds."""
    content: bytes
    format: OutputFormat
    images: Tuple[InlineImage, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return self.content.decode(PAYLOAD_ENCODING)


__all__ = [
    'TableSection',
    'NamedSeries',
    'ChartSection',
    'Section',
    'QueryReport',
    'Document',
    'InlineImage',
    'RenderedPayload',
]

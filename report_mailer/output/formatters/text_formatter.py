# Path: report_mailer/output/formatters/text_formatter.py
"""
Text Formatter

Renders a Document as plain text for terminals and text mail bodies.
Tables become fixed-width ASCII grids; charts cannot be embedded, so
they are summarized as a category / series / value listing.
"""

from typing import List, Sequence

from ...constants import EMPTY_RESULT_TEXT, OutputFormat
from ..report_models import ChartSection, Document, QueryReport, TableSection
from .base_formatter import BaseFormatter, format_number

SUMMARY_HEADERS = ('category', 'series', 'value')


def ascii_grid(headers: Sequence[str], rows: Sequence[Sequence[str]], right: Sequence[bool] = ()) -> List[str]:
    """
    Lay out cells as a +---+ bordered grid.

    Args:
        headers: Column headers
        rows: Cell text, one list per row
        right: Per-column flag to right-align the cells

    Returns:
        Grid lines
    """
    widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    border = '+' + '+'.join('-' * (width + 2) for width in widths) + '+'

    def line(cells, align):
        padded = []
        for index, cell in enumerate(cells):
            if index < len(align) and align[index]:
                padded.append(cell.rjust(widths[index]))
            else:
                padded.append(cell.ljust(widths[index]))
        return '| ' + ' | '.join(padded) + ' |'

    lines = [border, line(headers, ()), border]
    lines.extend(line(row, right) for row in rows)
    lines.append(border)
    return lines


def _one_line(text: str) -> str:
    return text.replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')


class TextFormatter(BaseFormatter):
    """Renders report as ASCII text."""

    @property
    def format_name(self) -> OutputFormat:
        return OutputFormat.TXT

    def format_report(self, document: Document) -> str:
        """Render full report as text."""
        heading = self.document_heading(document)
        lines = [heading, '=' * len(heading)]

        for query in document.queries:
            lines.extend(self._render_query(query))

        lines.append('')
        return '\n'.join(lines)

    def _render_query(self, query: QueryReport) -> List[str]:
        heading = self.query_heading(query.title)
        lines = ['', heading, '-' * len(heading)]
        for section in query.sections:
            lines.append('')
            if isinstance(section, TableSection):
                lines.extend(self._render_table(section))
            elif isinstance(section, ChartSection):
                lines.extend(self._render_chart(section))
        return lines

    def _render_table(self, section: TableSection) -> List[str]:
        if section.is_empty:
            return [EMPTY_RESULT_TEXT]
        headers = [_one_line(spec.title) for spec in section.fields]
        rows = [[_one_line(value.display()) for value in row] for row in section.rows]
        right = [
            any(row[index].is_numeric for row in section.rows)
            for index in range(len(section.fields))
        ]
        return ascii_grid(headers, rows, right)

    def _render_chart(self, section: ChartSection) -> List[str]:
        lines = [f"Chart ({section.kind.value}): {_one_line(section.title)}"]
        if not section.categories:
            lines.append(EMPTY_RESULT_TEXT)
            return lines
        rows = [
            [_one_line(category), _one_line(named.name), format_number(value)]
            for named in section.series
            for category, value in zip(section.categories, named.values)
        ]
        lines.extend(ascii_grid(SUMMARY_HEADERS, rows, (False, False, True)))
        return lines


__all__ = ['TextFormatter', 'ascii_grid']

# Path: report_mailer/output/formatters/markdown_formatter.py
"""
Markdown Formatter

Pipe tables and inline images. Charts are embedded as base64 data:
URIs, which mail clients and most Markdown viewers display inline.
"""

from typing import List

from ...constants import EMPTY_RESULT_TEXT, OutputFormat
from ..report_models import ChartSection, Document, QueryReport, TableSection
from .base_formatter import BaseFormatter, data_uri


def escape_cell(text: str) -> str:
    """Make text safe inside a pipe-table cell."""
    text = text.replace('\\', '\\\\').replace('|', '\\|')
    return text.replace('\r\n', '<br>').replace('\n', '<br>').replace('\r', '<br>')


def escape_alt(text: str) -> str:
    return text.replace('\\', '\\\\').replace('[', '\\[').replace(']', '\\]').replace('\n', ' ')


class MarkdownFormatter(BaseFormatter):
    """Renders report as Markdown."""

    @property
    def format_name(self) -> OutputFormat:
        return OutputFormat.MARKDOWN

    def format_report(self, document: Document) -> str:
        lines = [f"# {self.document_heading(document)}"]
        for query in document.queries:
            lines.extend(self._render_query(query))
        lines.append('')
        return '\n'.join(lines)

    def _render_query(self, query: QueryReport) -> List[str]:
        lines = ['', f"## {self.query_heading(query.title)}"]
        for section in query.sections:
            lines.append('')
            if isinstance(section, TableSection):
                lines.extend(self._render_table(section))
            elif isinstance(section, ChartSection):
                image = self.embed_chart(section)
                lines.append(f"![{escape_alt(section.title)}]({data_uri(image)})")
        return lines

    def _render_table(self, section: TableSection) -> List[str]:
        if section.is_empty:
            return [EMPTY_RESULT_TEXT]
        headers = [escape_cell(spec.title) for spec in section.fields]
        lines = [
            '| ' + ' | '.join(headers) + ' |',
            '|' + '|'.join(' --- ' for _ in headers) + '|',
        ]
        for row in section.rows:
            cells = [escape_cell(value.display()) for value in row]
            lines.append('| ' + ' | '.join(cells) + ' |')
        return lines


__all__ = ['MarkdownFormatter', 'escape_cell']

# Path: report_mailer/output/formatters/html_formatter.py
"""
HTML Formatter

Renders a standalone HTML document. All text is escaped; charts are
<img> tags with base64 data: URIs that the mail transport rewrites to
cid: references when it attaches the images.
"""

from html import escape
from typing import List

from ...constants import EMPTY_RESULT_TEXT, HTML_CHART_CLASS, HTML_TABLE_CLASS, OutputFormat
from ..report_models import ChartSection, Document, QueryReport, TableSection
from .base_formatter import BaseFormatter, data_uri


class HtmlFormatter(BaseFormatter):
    """Renders report as HTML."""

    @property
    def format_name(self) -> OutputFormat:
        return OutputFormat.HTML

    def format_report(self, document: Document) -> str:
        lines = [
            '<!DOCTYPE html>',
            '<html>',
            '<head>',
            '<meta charset="utf-8">',
            f"<title>{escape(document.title)}</title>",
            '</head>',
            '<body>',
            f"<h1>{escape(self.document_heading(document))}</h1>",
        ]
        for query in document.queries:
            lines.extend(self._render_query(query))
        lines.extend(['</body>', '</html>', ''])
        return '\n'.join(lines)

    def _render_query(self, query: QueryReport) -> List[str]:
        lines = [f"<h2>{escape(self.query_heading(query.title))}</h2>"]
        for section in query.sections:
            if isinstance(section, TableSection):
                lines.extend(self._render_table(section))
            elif isinstance(section, ChartSection):
                image = self.embed_chart(section)
                lines.append(
                    f'<img class="{HTML_CHART_CLASS}" alt="{escape(section.title)}" '
                    f'src="{data_uri(image)}">'
                )
        return lines

    def _render_table(self, section: TableSection) -> List[str]:
        if section.is_empty:
            return [f"<p>{EMPTY_RESULT_TEXT}</p>"]
        header = ''.join(f"<th>{escape(spec.title)}</th>" for spec in section.fields)
        lines = [
            f'<table class="{HTML_TABLE_CLASS}">',
            f"<thead><tr>{header}</tr></thead>",
            '<tbody>',
        ]
        for row in section.rows:
            cells = ''.join(f"<td>{escape(value.display())}</td>" for value in row)
            lines.append(f"<tr>{cells}</tr>")
        lines.extend(['</tbody>', '</table>'])
        return lines


__all__ = ['HtmlFormatter']

# Path: report_mailer/tests/unit/test_formatters.py
"""
Unit Tests for Formatters and render()

Tests:
- Headings and empty results in every format
- ASCII grid, pipe table and HTML table layout
- Escaping of user text
- Chart embedding (data URIs, inline images) and text summaries
- Deterministic output
"""

from decimal import Decimal

import pytest

from report_mailer.constants import OutputFormat
from report_mailer.exceptions import RenderError
from report_mailer.output import (
    ChartSection,
    Document,
    NamedSeries,
    QueryReport,
    TableSection,
    render,
)
from report_mailer.output.formatters import FormatterRegistry, TextFormatter
from report_mailer.output.formatters.text_formatter import ascii_grid
from report_mailer.process import ChartKind, FieldKind, FieldSpec, Value


NAME = FieldSpec('name', 'Name', FieldKind.STRING)
QT = FieldSpec('qt', 'Qty', FieldKind.INTEGER)


def _document(with_chart=True, rows=None):
    table = TableSection(
        fields=(NAME, QT),
        rows=rows if rows is not None else (
            (Value.text('x'), Value.integer(1)),
            (Value.text('y'), Value.integer(22)),
        ),
    )
    sections = [table]
    if with_chart:
        sections.append(ChartSection(
            kind=ChartKind.BAR,
            title='Per product',
            categories=('x', 'y'),
            series=(NamedSeries('Qty', (1, 22)),),
        ))
    return Document(title='Sales', queries=(QueryReport('Per product', tuple(sections)),))


class TestTextFormatter:
    """Plain text layout."""

    def test_headings_and_grid(self, mock_config):
        text = render(_document(with_chart=False), OutputFormat.TXT, mock_config).text

        assert text.startswith('The Sales results are here!\n')
        assert 'Query: Per product' in text
        assert '| Name | Qty |' in text
        assert '| x    |   1 |' in text
        assert '+------+-----+' in text

    def test_chart_summary_listing(self, mock_config):
        payload = render(_document(), OutputFormat.TXT, mock_config)

        assert 'Chart (Bar): Per product' in payload.text
        assert '| category | series | value |' in payload.text
        assert '| y        | Qty    |    22 |' in payload.text
        assert payload.images == ()

    def test_empty_result(self, mock_config):
        text = render(_document(with_chart=False, rows=()), OutputFormat.TXT, mock_config).text

        assert 'Empty result' in text
        assert '+--' not in text

    def test_plain_is_alias(self, mock_config):
        payload = render(_document(with_chart=False), 'Plain', mock_config)

        assert payload.format is OutputFormat.TXT

    def test_ascii_grid_alignment(self):
        lines = ascii_grid(['a', 'b'], [['long', '1']], [False, True])

        assert lines == [
            '+------+---+',
            '| a    | b |',
            '+------+---+',
            '| long | 1 |',
            '+------+---+',
        ]


class TestMarkdownFormatter:
    """Markdown layout."""

    def test_pipe_table(self, mock_config):
        text = render(_document(with_chart=False), OutputFormat.MARKDOWN, mock_config).text

        assert text.startswith('# The Sales results are here!\n')
        assert '## Query: Per product' in text
        assert '| Name | Qty |' in text
        assert '| --- | --- |' in text
        assert '| x | 1 |' in text

    def test_pipe_in_cell_is_escaped(self, mock_config):
        rows = ((Value.text('a|b'), Value.integer(1)),)
        text = render(_document(with_chart=False, rows=rows), OutputFormat.MARKDOWN, mock_config).text

        assert '| a\\|b | 1 |' in text

    def test_chart_as_inline_image(self, mock_config):
        payload = render(_document(), OutputFormat.MARKDOWN, mock_config)

        assert '![Per product](data:image/png;base64,' in payload.text
        assert len(payload.images) == 1


class TestHtmlFormatter:
    """HTML layout."""

    def test_table_markup(self, mock_config):
        text = render(_document(with_chart=False), OutputFormat.HTML, mock_config).text

        assert '<h1>The Sales results are here!</h1>' in text
        assert '<h2>Query: Per product</h2>' in text
        assert '<table class="report-table">' in text
        assert '<thead><tr><th>Name</th><th>Qty</th></tr></thead>' in text
        assert '<tr><td>x</td><td>1</td></tr>' in text

    def test_text_is_escaped(self, mock_config):
        rows = ((Value.text('<b>&</b>'), Value.integer(1)),)
        text = render(_document(with_chart=False, rows=rows), OutputFormat.HTML, mock_config).text

        assert '&lt;b&gt;&amp;&lt;/b&gt;' in text
        assert '<b>&</b>' not in text

    def test_chart_image(self, mock_config):
        payload = render(_document(), OutputFormat.HTML, mock_config)

        assert '<img class="report-chart" alt="Per product" src="data:image/png;base64,' in payload.text
        [image] = payload.images
        assert image.mime == 'image/png'
        assert image.data.startswith(b'\x89PNG')
        assert image.cid.endswith('@report-mailer')

    def test_empty_result(self, mock_config):
        text = render(_document(with_chart=False, rows=()), OutputFormat.HTML, mock_config).text

        assert '<p>Empty result</p>' in text
        assert '<table' not in text


class TestRender:
    """render() dispatch and determinism."""

    @pytest.mark.parametrize('fmt', list(OutputFormat))
    def test_byte_identical_twice(self, fmt, mock_config):
        document = _document()

        first = render(document, fmt, mock_config)
        second = render(document, fmt, mock_config)

        assert first.content == second.content
        assert first.images == second.images

    def test_unknown_format(self, mock_config):
        with pytest.raises(RenderError):
            render(_document(), 'Pdf', mock_config)

    def test_decimal_display(self, mock_config):
        rows = ((Value.text('x'), Value.decimal(Decimal('12.50'))),)
        text = render(_document(with_chart=False, rows=rows), OutputFormat.TXT, mock_config).text

        assert '12.50' in text

    def test_registry_lists_all_formats(self):
        assert set(FormatterRegistry.get_available()) == set(OutputFormat)
        assert isinstance(FormatterRegistry.get(OutputFormat.TXT), TextFormatter)

    def test_cleared_registry_rejects_every_format(self, mock_config):
        FormatterRegistry.clear()

        with pytest.raises(RenderError):
            render(_document(with_chart=False), OutputFormat.TXT, mock_config)

# Path: report_mailer/tests/integration/test_pipeline_integration.py
"""
Integration Tests for Complete Report Runs

End-to-end runs over a real SQLite file: definition -> queries ->
sections -> rendered payload -> delivery (mail transport mocked).
"""

import io
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from fixtures.sample_data import create_sales_database, sales_definition, sample_mail_section
from report_mailer.constants import OutputFormat
from report_mailer.definition import parse_definition
from report_mailer.exceptions import ConfigurationError, SourceConnectionError, TypeMismatchError
from report_mailer.output import ChartSection, TableSection
from report_mailer.pipeline import ReportRunner
from report_mailer.send import Dispatcher


def _runner(mock_config, recording_sink, transport=None, stream=None):
    dispatcher = Dispatcher(
        transport=transport or MagicMock(),
        stream=stream or io.StringIO(),
        sink=recording_sink,
    )
    return ReportRunner(config=mock_config, sink=recording_sink, dispatcher=dispatcher)


class TestEndToEnd:
    """Full runs over the sample sales database."""

    def test_document_structure(self, sales_db, mock_config, recording_sink):
        definition = parse_definition(sales_definition(sales_db))

        result = _runner(mock_config, recording_sink).run(definition)

        document = result.document
        assert document.title == 'Sales'
        assert [q.title for q in document.queries] == ['Per product', 'Per day and region']

        table, chart = document.queries[0].sections
        assert isinstance(table, TableSection)
        assert isinstance(chart, ChartSection)
        assert chart.categories == ('gadget', 'widget')
        assert chart.series[0].name == 'Quantity'
        assert chart.series[0].values == (9, 14)

    def test_pivot_chart_fills_missing_pairs(self, sales_db, mock_config, recording_sink):
        definition = parse_definition(sales_definition(sales_db))

        result = _runner(mock_config, recording_sink).run(definition)

        chart = result.document.queries[1].sections[1]
        assert len(chart.categories) == 3
        by_name = {named.name: named.values for named in chart.series}
        assert by_name == {'north': (10, 7, 0), 'south': (4, 0, 2)}

    def test_values_are_cast(self, sales_db, mock_config, recording_sink):
        definition = parse_definition(sales_definition(sales_db))

        result = _runner(mock_config, recording_sink).run(definition)

        table = result.document.queries[1].sections[0]
        first = table.rows[0]
        assert first[3].as_number() == Decimal('12.50')
        assert first[4].display() == 'true'
        assert table.rows[3][4].is_null

    def test_event_order(self, sales_db, mock_config, recording_sink):
        definition = parse_definition(sales_definition(sales_db))

        _runner(mock_config, recording_sink).run(definition)

        names = recording_sink.names()
        assert names[0] == 'source.connected'
        assert names.index('source.released') < names.index('render.finished')
        assert [e['title'] for e in recording_sink.of('query.started')] == [
            'Per product', 'Per day and region'
        ]

    @pytest.mark.parametrize('fmt', list(OutputFormat))
    def test_same_input_same_bytes(self, fmt, sales_db, mock_config, recording_sink):
        definition = parse_definition(sales_definition(sales_db, fmt=fmt.value))

        first = _runner(mock_config, recording_sink).run(definition)
        second = _runner(mock_config, recording_sink).run(definition)

        assert first.payload.format is fmt
        assert first.payload.content == second.payload.content
        assert first.payload.images == second.payload.images

    def test_stdout_and_mail(self, sales_db, mock_config, recording_sink):
        data = sales_definition(sales_db, fmt='Html', mail=sample_mail_section())
        data['send']['stdout'] = True
        transport = MagicMock()
        stream = io.StringIO()

        result = _runner(mock_config, recording_sink, transport, stream).run(parse_definition(data))

        assert result.outcome.stdout_written
        assert result.outcome.mail_sent
        assert stream.getvalue().startswith('<!DOCTYPE html>')
        envelope, subject, payload = transport.send.call_args.args
        assert subject == 'Sales'
        assert envelope.recipients == ('alice@example.com', 'bob@example.com')
        assert len(payload.images) == 2


class TestFailures:
    """Fatal errors abort before delivery."""

    def test_missing_database_runs_nothing(self, temp_dir, mock_config, recording_sink):
        definition = parse_definition(sales_definition(temp_dir / 'absent.db'))
        transport = MagicMock()

        with pytest.raises(SourceConnectionError):
            _runner(mock_config, recording_sink, transport).run(definition)

        assert recording_sink.of('query.started') == []
        transport.send.assert_not_called()

    def test_type_mismatch_names_field_and_row(self, temp_dir, mock_config, recording_sink):
        db = create_sales_database(temp_dir / 'bad.db', rows=[
            ('2024-01-01', 'north', 'widget', 1, '1.00', 1),
            ('2024-01-02', 'north', 'widget', 2, 'n/a', 1),
        ])
        definition = parse_definition(sales_definition(db))
        stream = io.StringIO()

        with pytest.raises(TypeMismatchError) as exc_info:
            _runner(mock_config, recording_sink, stream=stream).run(definition)

        assert exc_info.value.field == 'price'
        assert exc_info.value.row_index == 1
        assert stream.getvalue() == ''
        assert 'source.released' in recording_sink.names()

    def test_missing_column(self, sales_db, mock_config, recording_sink):
        data = sales_definition(sales_db)
        data['querys'][0]['sql'] = 'SELECT product AS name FROM sales'

        with pytest.raises(ConfigurationError) as exc_info:
            _runner(mock_config, recording_sink).run(parse_definition(data))

        assert 'qt' in str(exc_info.value)

    def test_missing_column_with_no_rows(self, sales_db, mock_config, recording_sink):
        data = sales_definition(sales_db)
        data['querys'][0]['sql'] = "SELECT product AS name FROM sales WHERE product = 'none'"

        with pytest.raises(ConfigurationError) as exc_info:
            _runner(mock_config, recording_sink).run(parse_definition(data))

        assert 'qt' in str(exc_info.value)
        assert 'render.finished' not in recording_sink.names()

    def test_empty_result_still_reports(self, sales_db, mock_config, recording_sink):
        data = sales_definition(sales_db)
        data['querys'][0]['sql'] = (
            "SELECT product AS name, qt FROM sales WHERE product = 'none'"
        )

        result = _runner(mock_config, recording_sink).run(parse_definition(data))

        assert b'Empty result' in result.payload.content

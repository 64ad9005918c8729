# Path: report_mailer/tests/unit/test_definition.py
"""
Unit Tests for Report Definitions

Tests YAML loading, schema validation and conversion to the
pipeline models.
"""

import copy

import pytest

from fixtures.sample_data import sales_definition, sample_mail_section, write_definition
from report_mailer.constants import OutputFormat
from report_mailer.definition import load_definition, parse_definition
from report_mailer.exceptions import ConfigurationError
from report_mailer.process import ChartKind, FieldKind, SeriesBy
from report_mailer.source import SourceKind


class TestLoadDefinition:
    """load_definition() error handling."""

    def test_loads_valid_file(self, definition_file):
        definition = load_definition(definition_file)

        assert definition.title == 'Sales'
        assert definition.source.kind is SourceKind.SQLITE
        assert definition.send.format is OutputFormat.TXT
        assert len(definition.querys) == 2

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            load_definition(temp_dir / 'missing.yaml')

        assert 'missing.yaml' in str(exc_info.value)

    def test_yaml_syntax_error(self, temp_dir):
        path = temp_dir / 'bad.yaml'
        path.write_text('title: [unclosed\n', encoding='utf-8')

        with pytest.raises(ConfigurationError) as exc_info:
            load_definition(path)

        assert 'YAML' in str(exc_info.value)

    def test_top_level_must_be_mapping(self, temp_dir):
        path = temp_dir / 'list.yaml'
        path.write_text('- a\n- b\n', encoding='utf-8')

        with pytest.raises(ConfigurationError):
            load_definition(path)


class TestValidation:
    """Schema rules."""

    def _base(self):
        return sales_definition('sales.db')

    def test_duplicate_field_names(self):
        data = self._base()
        data['querys'][0]['fields'].append({'field': 'qt', 'kind': 'Integer'})

        with pytest.raises(ConfigurationError) as exc_info:
            parse_definition(data)

        assert 'duplicate' in str(exc_info.value)

    def test_chart_references_undeclared_field(self):
        data = self._base()
        data['querys'][0]['chart']['series'] = ['missing']

        with pytest.raises(ConfigurationError) as exc_info:
            parse_definition(data)

        assert 'missing' in str(exc_info.value)

    def test_chart_needs_exactly_one_series_source(self):
        both = self._base()
        both['querys'][0]['chart']['series_by'] = {'key': 'name', 'values': 'qt'}
        neither = self._base()
        del neither['querys'][0]['chart']['series']

        for data in (both, neither):
            with pytest.raises(ConfigurationError):
                parse_definition(data)

    def test_unknown_kind(self):
        data = self._base()
        data['querys'][0]['fields'][1]['kind'] = 'Money'

        with pytest.raises(ConfigurationError):
            parse_definition(data)

    def test_unknown_key(self):
        data = self._base()
        data['querys'][0]['colour'] = 'red'

        with pytest.raises(ConfigurationError):
            parse_definition(data)

    def test_at_least_one_query(self):
        data = self._base()
        data['querys'] = []

        with pytest.raises(ConfigurationError):
            parse_definition(data)

    @pytest.mark.parametrize('name,expected', [
        ('Html', OutputFormat.HTML),
        ('markdown', OutputFormat.MARKDOWN),
        ('Plain', OutputFormat.TXT),
    ])
    def test_format_names(self, name, expected):
        data = self._base()
        data['send']['format'] = name

        assert parse_definition(data).send.format is expected


class TestConversion:
    """Definition -> pipeline models."""

    def test_query_specs(self):
        specs = parse_definition(sales_definition('sales.db')).to_query_specs()

        first, second = specs
        assert [f.name for f in first.fields] == ['name', 'qt']
        assert first.fields[1].kind is FieldKind.INTEGER
        assert first.chart.kind is ChartKind.BAR
        assert first.chart.series == ('qt',)
        assert second.chart.series_by == SeriesBy(key='region', values='qt')

    def test_title_defaults_to_field_name(self):
        data = sales_definition('sales.db')
        del data['querys'][0]['fields'][0]['title']

        spec = parse_definition(data).to_query_specs()[0]

        assert spec.fields[0].title == 'name'

    def test_mail_envelope(self):
        data = sales_definition('sales.db', mail=sample_mail_section())

        envelope = parse_definition(data).send.mail.to_envelope(default_starttls=False)

        assert envelope.recipients == ('alice@example.com', 'bob@example.com')
        assert envelope.sender == 'reports@example.com'
        assert envelope.password == 'secret'
        assert envelope.starttls is False

    def test_mail_recipient_list(self):
        mail = sample_mail_section()
        mail['to'] = ['a@example.com']
        mail['starttls'] = True
        data = sales_definition('sales.db', mail=copy.deepcopy(mail))

        envelope = parse_definition(data).send.mail.to_envelope(default_starttls=False)

        assert envelope.recipients == ('a@example.com',)
        assert envelope.starttls is True

    def test_round_trip_through_yaml(self, temp_dir):
        path = write_definition(temp_dir / 'r.yaml', sales_definition('sales.db', fmt='Html'))

        assert load_definition(path).send.format is OutputFormat.HTML

# Path: report_mailer/tests/unit/test_logging.py
"""
Unit Tests for IPO Logging and Diagnostic Sinks
"""

import logging

import pytest

from report_mailer.core.logger import (
    LoggingSink,
    RecordingSink,
    get_input_logger,
    get_output_logger,
    get_process_logger,
    setup_ipo_logging,
)
from report_mailer.core.logger.diagnostics import format_event
from report_mailer.core.logger.ipo_logging import IPOFilter


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after setup_ipo_logging() rewires it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestLayerLoggers:
    """IPO logger naming and filtering."""

    def test_logger_names(self):
        assert get_input_logger('x').name == 'input.x'
        assert get_process_logger('x').name == 'process.x'
        assert get_output_logger('x').name == 'output.x'

    def test_filter_by_prefix(self):
        record = logging.LogRecord('process.executor', logging.INFO, '', 0, 'msg', None, None)

        assert IPOFilter('process').filter(record)
        assert not IPOFilter('input').filter(record)


class TestSetupIpoLogging:
    """setup_ipo_logging() handler wiring."""

    def test_file_logs_per_layer(self, temp_dir, restore_root_logger):
        setup_ipo_logging(log_dir=temp_dir / 'logs', log_level='DEBUG', console_output=False)

        get_input_logger('test').info('from input')
        get_output_logger('test').info('from output')
        for handler in restore_root_logger.handlers:
            handler.flush()

        logs = temp_dir / 'logs'
        assert 'from input' in (logs / 'input_activity.log').read_text()
        assert 'from input' not in (logs / 'output_activity.log').read_text()
        assert 'from output' in (logs / 'output_activity.log').read_text()
        full = (logs / 'full_activity.log').read_text()
        assert 'from input' in full and 'from output' in full

    def test_no_log_dir_means_no_files(self, restore_root_logger):
        setup_ipo_logging(log_dir=None, log_level='WARNING', console_output=False)

        assert restore_root_logger.handlers == []
        assert restore_root_logger.level == logging.WARNING

    def test_console_goes_to_stderr(self, restore_root_logger, capsys):
        setup_ipo_logging(log_level='INFO', console_output=True)

        get_process_logger('test').info('console line')

        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'console line' in captured.err


class TestSinks:
    """Diagnostic sinks."""

    def test_format_event_sorts_keys(self):
        assert format_event('query.finished', {'rows': 3, 'title': 'T'}) == \
            "query.finished rows=3 title='T'"
        assert format_event('source.connected', {}) == 'source.connected'

    def test_logging_sink_routes_by_prefix(self, capture_logs):
        records = []

        class Collector(logging.Handler):
            def emit(self, record):
                records.append(record)

        collector = Collector()
        logging.getLogger().addHandler(collector)
        try:
            sink = LoggingSink('unit')
            sink.emit('source.connected', kind='Sqlite')
            sink.emit('query.finished', title='T', rows=2)
            sink.emit('delivery.mail_failed', level=logging.WARNING, error='boom')
        finally:
            logging.getLogger().removeHandler(collector)

        assert [r.name for r in records] == ['input.unit', 'process.unit', 'output.unit']
        assert records[2].levelno == logging.WARNING
        assert "error='boom'" in capture_logs.getvalue()

    def test_recording_sink(self):
        sink = RecordingSink()
        sink.emit('query.started', title='A')
        sink.emit('query.started', title='B')
        sink.emit('query.finished', title='A', rows=0)

        assert sink.names() == ['query.started', 'query.started', 'query.finished']
        assert sink.of('query.started') == [{'title': 'A'}, {'title': 'B'}]

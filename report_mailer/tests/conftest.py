# Path: report_mailer/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for report_mailer

Provides common test fixtures used across all test modules.
"""

import logging
import os
import sys
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Project root and tests directory on the path
TESTS_ROOT = Path(__file__).parent
PROJECT_ROOT = TESTS_ROOT.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_data import (  # noqa: E402
    create_sales_database,
    sales_definition,
    write_definition,
)
from report_mailer.core.logger import RecordingSink  # noqa: E402
from report_mailer.process import ChartKind, ChartSpec, FieldKind, FieldSpec, QuerySpec  # noqa: E402


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'REPORT_MAILER_LOG_LEVEL': 'DEBUG',
        'REPORT_MAILER_LOG_CONSOLE': 'false',
        'REPORT_MAILER_SMTP_TIMEOUT': '5',
        'REPORT_MAILER_SMTP_STARTTLS': 'false',
        'REPORT_MAILER_CHART_WIDTH': '4',
        'REPORT_MAILER_CHART_HEIGHT': '3',
        'REPORT_MAILER_CHART_DPI': '50',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# DATA FIXTURES
# ==============================================================================

@pytest.fixture
def sales_db(temp_dir):
    """SQLite database file with sample sales rows."""
    return create_sales_database(temp_dir / 'sales.db')


@pytest.fixture
def definition_file(temp_dir, sales_db):
    """YAML report definition over the sales database."""
    return write_definition(temp_dir / 'report.yaml', sales_definition(sales_db))


@pytest.fixture
def name_qt_query():
    """Query with a String key and an Integer series, charted as bars."""
    return QuerySpec(
        title='T',
        sql='SELECT name, qt FROM t',
        fields=(
            FieldSpec('name', 'Name', FieldKind.STRING),
            FieldSpec('qt', 'qt', FieldKind.INTEGER),
        ),
        chart=ChartSpec(kind=ChartKind.BAR, keys_by='name', series=('qt',)),
    )


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader for testing."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'log_level': 'DEBUG',
        'log_dir': None,
        'log_console': False,
        'smtp_timeout': 5.0,
        'smtp_starttls': True,
        'chart_width': 4.0,
        'chart_height': 3.0,
        'chart_dpi': 50,
    }.get(key, default)
    return config


@pytest.fixture
def recording_sink():
    """In-memory diagnostic sink."""
    return RecordingSink()


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def capture_logs():
    """Capture log output for testing."""
    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield log_capture

    root_logger.removeHandler(handler)
    root_logger.setLevel(previous_level)


@pytest.fixture(autouse=True)
def default_registries():
    """Restore the built-in section producers and formatters after each test."""
    from report_mailer.output.formatters import FormatterRegistry
    from report_mailer.output.report_generator import register_defaults
    from report_mailer.output.sections import SectionRegistry

    yield

    SectionRegistry.clear()
    FormatterRegistry.clear()
    register_defaults()


@pytest.fixture
def reset_singletons():
    """Reset singleton instances between tests."""
    from report_mailer.config_loader import ConfigLoader

    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False

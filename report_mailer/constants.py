# Path: report_mailer/constants.py
"""
System-Wide Constants for report_mailer

Central repository for constant values shared by the pipeline.

Constants are organized by category:
- Output Formats
- Document Text
- HTML Classes
- Chart Defaults
- Status Markers
- Read-Only SQL
"""

from enum import Enum
from typing import Final


# ==============================================================================
# OUTPUT FORMATS
# ==============================================================================

class OutputFormat(str, Enum):
    """
    Rendered document formats.

    PLAIN is accepted in report definitions as an alias of TXT.
    """
    HTML = 'Html'
    MARKDOWN = 'Markdown'
    TXT = 'Txt'

    @classmethod
    def parse(cls, value: str) -> 'OutputFormat':
        """
        Resolve a format name case-insensitively.

        Raises:
            ValueError: If the name is not a known format
        """
        key = str(value).strip().lower()
        if key in FORMAT_ALIASES:
            return FORMAT_ALIASES[key]
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown output format: {value}")


FORMAT_ALIASES: Final[dict[str, OutputFormat]] = {
    'plain': OutputFormat.TXT,
    'text': OutputFormat.TXT,
    'md': OutputFormat.MARKDOWN,
}

# MIME subtype used when the payload becomes a mail body
FORMAT_MIME_SUBTYPES: Final[dict[OutputFormat, str]] = {
    OutputFormat.HTML: 'html',
    OutputFormat.MARKDOWN: 'plain',
    OutputFormat.TXT: 'plain',
}


# ==============================================================================
# DOCUMENT TEXT
# ==============================================================================

DOCUMENT_HEADING: Final[str] = 'The {title} results are here!'
QUERY_HEADING: Final[str] = 'Query: {title}'
EMPTY_RESULT_TEXT: Final[str] = 'Empty result'
PAYLOAD_ENCODING: Final[str] = 'utf-8'


# ==============================================================================
# HTML CLASSES
# ==============================================================================

HTML_TABLE_CLASS: Final[str] = 'report-table'
HTML_CHART_CLASS: Final[str] = 'report-chart'


# ==============================================================================
# CHART DEFAULTS
# ==============================================================================

# Magnitude used for NULL cells and absent (category, series) pairs
CHART_ZERO: Final[int] = 0
CHART_IMAGE_MIME: Final[str] = 'image/png'
CID_DOMAIN: Final[str] = 'report-mailer'


# ==============================================================================
# STATUS MARKERS (CLI)
# ==============================================================================

STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'


# ==============================================================================
# READ-ONLY SQL
# ==============================================================================

READ_ONLY_KEYWORDS: Final[frozenset[str]] = frozenset({'select', 'with', 'values'})


__all__ = [
    'OutputFormat',
    'FORMAT_ALIASES',
    'FORMAT_MIME_SUBTYPES',
    'DOCUMENT_HEADING',
    'QUERY_HEADING',
    'EMPTY_RESULT_TEXT',
    'PAYLOAD_ENCODING',
    'HTML_TABLE_CLASS',
    'HTML_CHART_CLASS',
    'CHART_ZERO',
    'CHART_IMAGE_MIME',
    'CID_DOMAIN',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'READ_ONLY_KEYWORDS',
]

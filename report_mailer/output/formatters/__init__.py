# Path: report_mailer/output/formatters/__init__.py
"""
Report Formatters

Each formatter renders a Document into one output format.
Formatters know nothing about queries or data sources. New formats
add new formatters without changing the section producers.
"""

from .base_formatter import BaseFormatter, FormatterRegistry
from .html_formatter import HtmlFormatter
from .markdown_formatter import MarkdownFormatter
from .text_formatter import TextFormatter

__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'HtmlFormatter',
    'MarkdownFormatter',
    'TextFormatter',
]

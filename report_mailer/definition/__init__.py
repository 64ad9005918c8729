# Path: report_mailer/definition/__init__.py
"""
Report Definition Package

YAML report definitions validated with pydantic.

Usage:
    from report_mailer.definition import load_definition

    definition = load_definition('sales.yaml')
    queries = definition.to_query_specs()
"""

from .models import (
    FieldDefinition,
    SeriesByDefinition,
    ChartDefinition,
    QueryDefinition,
    SourceDefinition,
    MailDefinition,
    SendDefinition,
    ReportDefinition,
)
from .loader import load_definition, parse_definition

__all__ = [
    'FieldDefinition',
    'SeriesByDefinition',
    'ChartDefinition',
    'QueryDefinition',
    'SourceDefinition',
    'MailDefinition',
    'SendDefinition',
    'ReportDefinition',
    'load_definition',
    'parse_definition',
]

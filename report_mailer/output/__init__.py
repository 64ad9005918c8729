# Path: report_mailer/output/__init__.py
"""
Output Module for report_mailer

Turns typed results into documents and documents into payloads.

Components:
    - report_models: Format-agnostic document structures
    - sections: Section producers (table, chart) and their registry
    - charts: matplotlib rasterization of chart sections
    - formatters: Html, Markdown and Txt renderers and their registry
    - report_generator: ReportAssembler and render()
"""

from .report_models import (
    TableSection,
    NamedSeries,
    ChartSection,
    QueryReport,
    Document,
    InlineImage,
    RenderedPayload,
)
from .report_generator import ReportAssembler, render

__all__ = [
    'TableSection',
    'NamedSeries',
    'ChartSection',
    'QueryReport',
    'Document',
    'InlineImage',
    'RenderedPayload',
    'ReportAssembler',
    'render',
]

# Path: report_mailer/output/sections/__init__.py
"""
Report Sections

Each section producer converts one query's ResultSet into sections.
New section kinds add new producers here without changing formatters
or the assembler.
"""

from .base_section import BaseSection
from .section_registry import SectionRegistry
from .table import TableSectionProducer
from .chart import ChartSectionProducer

__all__ = [
    'BaseSection',
    'SectionRegistry',
    'TableSectionProducer',
    'ChartSectionProducer',
]

# Path: report_mailer/output/sections/table.py
"""
Table Section Producer

Every query gets a table mirroring its ResultSet verbatim.
"""

from typing import List

from ...process.models import QuerySpec, ResultSet
from ..report_models import Section, TableSection
from .base_section import BaseSection


class TableSectionProducer(BaseSection):
    """Emits one TableSection per query."""

    @property
    def section_type(self) -> str:
        return 'table'

    def produce(self, query: QuerySpec, result_set: ResultSet) -> List[Section]:
        return [TableSection(fields=result_set.fields, rows=result_set.rows)]


__all__ = ['TableSectionProducer']

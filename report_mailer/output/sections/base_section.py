# Path: report_mailer/output/sections/base_section.py
"""
Section Producer Interface

A producer looks at one query and its ResultSet and returns the
sections it contributes: nothing, or one format-agnostic section.
Formatters never see a ResultSet, only sections.
"""

from abc import ABC, abstractmethod
from typing import List

from ...process.models import QuerySpec, ResultSet
from ..report_models import Section


class BaseSection(ABC):
    """Turns a typed result into document sections."""

    @property
    @abstractmethod
    def section_type(self) -> str:
        """Registry key, e.g. 'table' or 'chart'."""

    @abstractmethod
    def produce(self, query: QuerySpec, result_set: ResultSet) -> List[Section]:
        """
        Args:
            query: Declared fields and optional chart
            result_set: Cast rows in backend order

        Returns:
            Zero or more sections
        """


__all__ = ['BaseSection']

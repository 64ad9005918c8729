# Path: report_mailer/output/sections/section_registry.py
"""
Section Registry

Producers are kept in registration order. That order is the section
order inside every QueryReport: a query always shows its table before
its chart because TableSectionProducer is registered first.

Usage:
    SectionRegistry.register(TableSectionProducer)
    sections = SectionRegistry.build_all(query, result_set)
"""

from typing import Dict, List, Type

from ...process.models import QuerySpec, ResultSet
from ..report_models import Section
from .base_section import BaseSection


class SectionRegistry:
    """Ordered, class-level table of section producers."""

    _producers: Dict[str, BaseSection] = {}

    @classmethod
    def register(cls, producer_class: Type[BaseSection]) -> None:
        """
        Add a producer after the ones already registered.

        Registering a section type twice keeps its first position.
        """
        producer = producer_class()
        cls._producers.setdefault(producer.section_type, producer)

    @classmethod
    def build_all(cls, query: QuerySpec, result_set: ResultSet) -> List[Section]:
        """
        Sections for one executed query.

        Args:
            query: Declared query
            result_set: Its typed result

        Returns:
            Sections from every producer, in registration order

        Raises:
            ConfigurationError: A chart names an undeclared field
            TypeMismatchError: A chart value is not numeric
        """
        sections: List[Section] = []
        for producer in cls._producers.values():
            sections.extend(producer.produce(query, result_set))
        return sections

    @classmethod
    def get_registered(cls) -> List[str]:
        """Section types in layout order."""
        return list(cls._producers)

    @classmethod
    def clear(cls) -> None:
        cls._producers.clear()


__all__ = ['SectionRegistry']

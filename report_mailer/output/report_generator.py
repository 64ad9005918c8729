# Path: report_mailer/output/report_generator.py
"""
Report Generator

Assembles typed results into a Document via registered section
producers, then renders it via registered formatters.

Architecture:
    (QuerySpec, ResultSet)  ->  [Section Producers]  ->  Document  ->  [Formatter]  ->  RenderedPayload

Extensibility:
    - New section kinds: register a new section producer
    - New output formats: register a new formatter
    - Both use open registries; no code changes to existing modules

Usage:
    from report_mailer.output import ReportAssembler, render

    assembler = ReportAssembler()
    document = assembler.assemble_document('Sales', zip(queries, results))
    payload = render(document, OutputFormat.HTML)
"""

from typing import Iterable, List, Optional, Tuple, Union

from ..config_loader import ConfigLoader
from ..constants import OutputFormat
from ..core.logger import DiagnosticSink, LoggingSink
from ..exceptions import RenderError
from ..process.models import QuerySpec, ResultSet
from .report_models import Document, QueryReport, RenderedPayload, Section
from .sections import (
    SectionRegistry,
    TableSectionProducer,
    ChartSectionProducer,
)
from .formatters import (
    FormatterRegistry,
    HtmlFormatter,
    MarkdownFormatter,
    TextFormatter,
)


def register_defaults() -> None:
    """Register built-in section producers and formatters."""
    # Section producers (order matters for report layout)
    SectionRegistry.register(TableSectionProducer)
    SectionRegistry.register(ChartSectionProducer)

    # Formatters
    FormatterRegistry.register(HtmlFormatter)
    FormatterRegistry.register(MarkdownFormatter)
    FormatterRegistry.register(TextFormatter)


# Auto-register on module import
register_defaults()


class ReportAssembler:
    """
    Builds QueryReports and the final Document.

    Example:
        assembler = ReportAssembler()
        report = assembler.assemble(query, result_set)
    """

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        """
        Initialize assembler.

        Args:
            sink: Diagnostic sink (defaults to LoggingSink)
        """
        self.sink = sink if sink is not None else LoggingSink('assembler')

    def assemble(self, query: QuerySpec, result_set: ResultSet) -> QueryReport:
        """
        Produce the sections of one query.

        Raises:
            TypeMismatchError: If a chart series holds non-numeric data
            ConfigurationError: If the chart references unknown fields
        """
        sections: List[Section] = SectionRegistry.build_all(query, result_set)
        self.sink.emit(
            'assembly.query',
            title=query.title,
            sections=[section.section_type for section in sections],
        )
        return QueryReport(title=query.title, sections=tuple(sections))

    def assemble_document(
        self,
        title: str,
        results: Iterable[Tuple[QuerySpec, ResultSet]],
    ) -> Document:
        """
        Build the Document for a run.

        Args:
            title: Report title
            results: (query, result) pairs in declaration order

        Returns:
            Immutable Document
        """
        queries = tuple(self.assemble(query, result_set) for query, result_set in results)
        self.sink.emit('assembly.document', title=title, queries=len(queries))
        return Document(title=title, queries=queries)


def render(
    document: Document,
    output_format: Union[OutputFormat, str],
    config: Optional[ConfigLoader] = None,
) -> RenderedPayload:
    """
    Render a Document in the requested format.

    Args:
        document: Document to render
        output_format: OutputFormat or its name ('Html', 'Plain', ...)
        config: ConfigLoader for chart geometry

    Returns:
        RenderedPayload

    Raises:
        RenderError: If the format is unknown or rendering fails
    """
    try:
        fmt = output_format if isinstance(output_format, OutputFormat) else OutputFormat.parse(output_format)
    except ValueError as e:
        raise RenderError(str(e)) from None

    formatter = FormatterRegistry.get(fmt, config)
    if formatter is None:
        raise RenderError(f"No formatter registered for {fmt.value}")
    return formatter.render(document)


__all__ = ['ReportAssembler', 'register_defaults', 'render']

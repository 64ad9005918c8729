# Path: report_mailer/pipeline.py
"""
Report Runner

One synchronous, top-to-bottom report run:

    definition -> QueryExecutor.run_all -> ReportAssembler
               -> render() -> Dispatcher

Any fatal error aborts the run before delivery, so a half-built
report is never sent. Only a mail transport failure is tolerated;
it is reported in the RunResult.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .config_loader import ConfigLoader
from .constants import OutputFormat
from .core.logger import DiagnosticSink, LoggingSink
from .definition import ReportDefinition
from .output import Document, RenderedPayload, ReportAssembler, render
from .process import QueryExecutor
from .send import DeliveryOutcome, DeliveryRequest, Dispatcher, SmtpTransport
from .source import DataSourceAdapter, SourceKind, get_adapter


@dataclass(frozen=True)
class RunResult:
    """Everything a run produced."""
    document: Document
    payload: RenderedPayload
    outcome: DeliveryOutcome


class ReportRunner:
    """
    Wires the pipeline stages for one report run.

    Example:
        runner = ReportRunner()
        result = runner.run(load_definition('sales.yaml'))
        if result.outcome.mail_failed:
            ...
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        sink: Optional[DiagnosticSink] = None,
        adapter_factory: Callable[[SourceKind], DataSourceAdapter] = get_adapter,
        dispatcher: Optional[Dispatcher] = None,
    ):
        """
        Initialize runner.

        Args:
            config: ConfigLoader (creates one if not provided)
            sink: Diagnostic sink shared by every stage
            adapter_factory: Builds the adapter for the source kind
            dispatcher: Delivery stage (defaults to Dispatcher with SMTP)
        """
        self.config = config or ConfigLoader()
        self.sink = sink if sink is not None else LoggingSink()
        self.adapter_factory = adapter_factory
        self.dispatcher = dispatcher or Dispatcher(
            transport=SmtpTransport(self.config),
            sink=self.sink,
        )

    def run(
        self,
        definition: ReportDefinition,
        output_format: Optional[OutputFormat] = None,
        stdout: Optional[bool] = None,
        send_mail: bool = True,
    ) -> RunResult:
        """
        Execute a report definition.

        Args:
            definition: Validated report definition
            output_format: Override of send.format
            stdout: Override of send.stdout
            send_mail: False skips mail delivery even if configured

        Returns:
            RunResult

        Raises:
            ReportError: Any fatal pipeline failure
        """
        queries = definition.to_query_specs()
        adapter = self.adapter_factory(definition.source.kind)

        executor = QueryExecutor(adapter, sink=self.sink)
        results = executor.run_all(definition.source.conn, queries)

        assembler = ReportAssembler(sink=self.sink)
        document = assembler.assemble_document(definition.title, zip(queries, results))

        fmt = output_format or definition.send.format
        payload = render(document, fmt, self.config)
        self.sink.emit(
            'render.finished',
            format=fmt.value,
            bytes=len(payload.content),
            images=len(payload.images),
        )

        mail = definition.send.mail if send_mail else None
        request = DeliveryRequest(
            payload=payload,
            subject=(mail.subject if mail and mail.subject else definition.title),
            stdout=definition.send.stdout if stdout is None else stdout,
            mail=mail.to_envelope(self.config.get('smtp_starttls', True)) if mail else None,
        )
        outcome = self.dispatcher.dispatch(request)

        return RunResult(document=document, payload=payload, outcome=outcome)


__all__ = ['ReportRunner', 'RunResult']

# Path: report_mailer/send/dispatcher.py
"""
Dispatcher

Routes a rendered payload to the terminal and/or the mail transport.

Failure policy:
    Terminal write failure  -> DeliveryError, the run fails
    Mail transport failure  -> warning, recorded in DeliveryOutcome;
                               the run still succeeds. No retries.
"""

import logging
import sys
from typing import Optional, Protocol, TextIO

from ..core.logger import DiagnosticSink, LoggingSink
from ..exceptions import DeliveryError
from ..output.report_models import RenderedPayload
from .models import DeliveryOutcome, DeliveryRequest, MailEnvelope
from .smtp_transport import SmtpTransport


class MailTransport(Protocol):
    """Sends one rendered report by mail."""

    def send(self, envelope: MailEnvelope, subject: str, payload: RenderedPayload) -> None:
        ...


class Dispatcher:
    """
    Delivers rendered reports.

    Example:
        dispatcher = Dispatcher()
        outcome = dispatcher.dispatch(request)
        if outcome.mail_failed:
            print(outcome.mail_error)
    """

    def __init__(
        self,
        transport: Optional[MailTransport] = None,
        stream: Optional[TextIO] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            transport: Mail transport (defaults to SmtpTransport)
            stream: Terminal stream (defaults to sys.stdout at dispatch time)
            sink: Diagnostic sink (defaults to LoggingSink)
        """
        self.transport = transport
        self.stream = stream
        self.sink = sink if sink is not None else LoggingSink('dispatcher')

    def dispatch(self, request: DeliveryRequest) -> DeliveryOutcome:
        """
        Deliver a request.

        Returns:
            DeliveryOutcome

        Raises:
            DeliveryError: If writing to the terminal fails
        """
        stdout_written = False
        if request.stdout:
            self._write_stdout(request.payload)
            stdout_written = True
            self.sink.emit('delivery.stdout', bytes=len(request.payload.content))

        if request.mail is None:
            return DeliveryOutcome(stdout_written=stdout_written)

        transport = self.transport or SmtpTransport()
        try:
            transport.send(request.mail, request.subject, request.payload)
        except DeliveryError as e:
            self.sink.emit('delivery.mail_failed', level=logging.WARNING, error=str(e))
            return DeliveryOutcome(
                stdout_written=stdout_written,
                mail_sent=False,
                mail_error=str(e),
            )

        self.sink.emit('delivery.mail_sent', recipients=len(request.mail.recipients))
        return DeliveryOutcome(stdout_written=stdout_written, mail_sent=True)

    def _write_stdout(self, payload: RenderedPayload) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        try:
            text = payload.text
            stream.write(text)
            if not text.endswith('\n'):
                stream.write('\n')
            stream.flush()
        except (OSError, UnicodeError, ValueError) as e:
            raise DeliveryError(f"Cannot write report to terminal: {e}") from e


__all__ = ['Dispatcher', 'MailTransport']

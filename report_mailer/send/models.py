# Path: report_mailer/send/models.py
"""
Delivery Models

What the dispatcher receives and what it reports back.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..output.report_models import RenderedPayload


DEFAULT_SENDER_NAME = 'report-mailer'


@dataclass(frozen=True)
class MailEnvelope:
    """
    SMTP settings and addressing for one report mail.

    Attributes:
        host: SMTP server host
        port: SMTP server port
        sender: From address
        recipients: To addresses
        user: SMTP login (empty string skips login)
        password: SMTP password
        starttls: Upgrade the connection with STARTTLS before login
        sender_name: Display name on the From header
    """
    host: str
    port: int
    sender: str
    recipients: Tuple[str, ...]
    user: str = ''
    password: str = ''
    starttls: bool = True
    sender_name: str = DEFAULT_SENDER_NAME

    def __repr__(self) -> str:
        return (
            f"MailEnvelope(host={self.host!r}, port={self.port}, "
            f"sender={self.sender!r}, recipients={self.recipients!r})"
        )


@dataclass(frozen=True)
class DeliveryRequest:
    """
    Rendered report plus where it should go.

    Attributes:
        payload: Rendered document
        subject: Mail subject (the report title unless overridden)
        stdout: Write the payload to the terminal
        mail: Mail envelope, or None to skip mail
    """
    payload: RenderedPayload
    subject: str
    stdout: bool = False
    mail: Optional[MailEnvelope] = None


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of a dispatch. mail_error is set when mail delivery failed."""
    stdout_written: bool = False
    mail_sent: bool = False
    mail_error: Optional[str] = None

    @property
    def mail_failed(self) -> bool:
        return self.mail_error is not None


__all__ = ['MailEnvelope', 'DeliveryRequest', 'DeliveryOutcome']

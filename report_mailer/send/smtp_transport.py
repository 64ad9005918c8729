# Path: report_mailer/send/smtp_transport.py
"""
SMTP Transport

Builds the report mail and sends it with smtplib.

Message layout:
    Html payload      multipart/alternative, with the HTML part in a
                      multipart/related carrying each chart as an
                      inline image/png part referenced by cid:
    Markdown          text/plain body in multipart/mixed; chart data
                      URIs become cid: references to inline image
                      attachments
    Txt               single text/plain body

Failures of any kind surface as DeliveryError; nothing is retried.
"""

import smtplib
import ssl
from email.headerregistry import Address
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from ..config_loader import ConfigLoader
from ..constants import FORMAT_MIME_SUBTYPES, OutputFormat
from ..core.logger import get_output_logger
from ..exceptions import DeliveryError
from ..output.formatters.base_formatter import data_uri
from ..output.report_models import RenderedPayload
from .models import MailEnvelope


logger = get_output_logger('smtp')

PLAIN_FALLBACK = 'This report is best viewed in an HTML capable mail client.'


def build_message(envelope: MailEnvelope, subject: str, payload: RenderedPayload) -> EmailMessage:
    """
    Build the mail for a rendered payload.

    Data URIs in the payload are replaced by cid: references to the
    attached inline images, so no base64 text reaches the mail body.
    """
    message = EmailMessage()
    message['From'] = formataddr((envelope.sender_name, envelope.sender))
    message['To'] = ', '.join(envelope.recipients)
    message['Subject'] = subject

    subtype = FORMAT_MIME_SUBTYPES[payload.format]
    body = payload.text
    for image in payload.images:
        body = body.replace(data_uri(image), f"cid:{image.cid}")

    if payload.format is not OutputFormat.HTML:
        message.set_content(body, subtype=subtype)
        for number, image in enumerate(payload.images, start=1):
            maintype, _, image_subtype = image.mime.partition('/')
            message.add_attachment(
                image.data,
                maintype=maintype,
                subtype=image_subtype,
                cid=f"<{image.cid}>",
                disposition='inline',
                filename=f"chart-{number}.{image_subtype}",
            )
        return message

    message.set_content(PLAIN_FALLBACK)
    message.add_alternative(body, subtype=subtype)
    html_part = message.get_payload()[-1]
    for image in payload.images:
        maintype, _, image_subtype = image.mime.partition('/')
        html_part.add_related(
            image.data,
            maintype=maintype,
            subtype=image_subtype,
            cid=f"<{image.cid}>",
            disposition='inline',
        )
    return message


class SmtpTransport:
    """
    Sends report mails over SMTP.

    Example:
        transport = SmtpTransport()
        transport.send(envelope, 'Sales', payload)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize transport.

        Args:
            config: ConfigLoader (creates one if not provided)
        """
        self.config = config or ConfigLoader()

    def send(self, envelope: MailEnvelope, subject: str, payload: RenderedPayload) -> None:
        """
        Deliver one report mail.

        Raises:
            DeliveryError: If the mail cannot be built or sent
        """
        if not envelope.recipients:
            raise DeliveryError("Mail has no recipients")

        try:
            for address in (envelope.sender, *envelope.recipients):
                Address(addr_spec=address)
            message = build_message(envelope, subject, payload)
        except (ValueError, TypeError) as e:
            raise DeliveryError(f"Cannot build mail: {e}") from e

        timeout = self.config.get('smtp_timeout')
        logger.info(f"Sending mail to {', '.join(envelope.recipients)} via {envelope.host}:{envelope.port}")
        try:
            with smtplib.SMTP(envelope.host, envelope.port, timeout=timeout) as smtp:
                if envelope.starttls:
                    smtp.starttls(context=ssl.create_default_context())
                if envelope.user:
                    smtp.login(envelope.user, envelope.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryError(f"SMTP delivery failed: {e}") from e

        logger.info("Mail sent")


__all__ = ['SmtpTransport', 'build_message']

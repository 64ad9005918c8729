# Path: report_mailer/send/__init__.py
"""
Delivery Package for report_mailer

    Dispatcher     - terminal and/or mail delivery of a rendered report
    SmtpTransport  - smtplib based mail transport
"""

from .models import MailEnvelope, DeliveryRequest, DeliveryOutcome
from .dispatcher import Dispatcher, MailTransport
from .smtp_transport import SmtpTransport, build_message

__all__ = [
    'MailEnvelope',
    'DeliveryRequest',
    'DeliveryOutcome',
    'Dispatcher',
    'MailTransport',
    'SmtpTransport',
    'build_message',
]

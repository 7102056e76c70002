"""Public exports for notification channels."""

from .dispatcher import Notifier, SourceMapNotifier, format_notification
from .email import EmailService
from .models import EmailMessage, OperationEvent
from .slack import SlackWebhookClient

__all__ = [
    "EmailMessage",
    "EmailService",
    "Notifier",
    "OperationEvent",
    "SlackWebhookClient",
    "SourceMapNotifier",
    "format_notification",
]

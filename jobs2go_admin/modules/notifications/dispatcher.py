"""Best-effort broadcast of source map operation outcomes to Slack and email.

``Notifier.notify`` never raises: a failing channel is logged and skipped so
the operation that triggered the notification is never affected by it.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Optional, Protocol

from .email import EmailService
from .models import EmailMessage, OperationEvent, OperationStatus
from .slack import SlackWebhookClient

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    "success": "#36a64f",
    "warning": "#f2c744",
    "failure": "#d63031",
}

_BOLD = re.compile(r"\*([^*]+)\*")


class Notifier(Protocol):
    async def notify(self, event: OperationEvent) -> None:
        ...


def _humanize(value: str) -> str:
    return " ".join(part.capitalize() for part in value.replace("_", " ").split())


def format_notification(event: OperationEvent) -> tuple[str, str]:
    title = f"Source Map {_humanize(event.type)} {_humanize(event.status)}"
    body = f"*{title}*\n\n{event.message}"

    if event.details:
        body += "\n\n*Details:*\n"
        for key, value in event.details.items():
            body += f"• {key}: {json.dumps(value, default=str)}\n"

    if event.operation_id:
        body += f"\n*Operation ID:* {event.operation_id}"

    body += f"\n*Time:* {event.timestamp.isoformat()}"
    return title, body


def markdown_to_text(body: str) -> str:
    return _BOLD.sub(r"\1", body)


def markdown_to_html(body: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", body).replace("\n", "<br>")


class SourceMapNotifier:
    def __init__(
        self,
        *,
        slack: Optional[SlackWebhookClient],
        email: Optional[EmailService],
        sender: Optional[str],
        admin_email: Optional[str],
    ) -> None:
        self.slack = slack
        self.email = email
        self.sender = sender
        self.admin_email = admin_email

    async def notify(self, event: OperationEvent) -> None:
        try:
            title, body = format_notification(event)
            await asyncio.gather(
                self._send_slack(title, body, event.status),
                self._send_email(title, body, event.status),
            )
            logger.info("Source map operation notification sent: %s - %s", event.type, event.status)
        except Exception:
            logger.exception("Failed to send source map operation notification")

    async def _send_slack(self, title: str, body: str, status: OperationStatus) -> None:
        if self.slack is None:
            return
        try:
            await self.slack.send_message(
                title,
                attachments=[
                    {
                        "color": STATUS_COLORS.get(status, STATUS_COLORS["failure"]),
                        "text": body,
                        "footer": "Source Map Management System",
                    }
                ],
            )
        except Exception:
            logger.exception("Failed to send Slack notification")

    async def _send_email(self, title: str, body: str, status: OperationStatus) -> None:
        if self.email is None or not self.sender or not self.admin_email:
            return
        try:
            await self.email.send_email(
                EmailMessage(
                    to=[self.admin_email],
                    subject=f"[{status.upper()}] {title}",
                    text=markdown_to_text(body),
                    html=markdown_to_html(body),
                    from_address=self.sender,
                )
            )
        except Exception:
            logger.exception("Failed to send email notification")

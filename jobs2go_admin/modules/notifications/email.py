"""Email delivery with a Resend primary provider and an SMTP fallback."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

import httpx

from jobs2go_admin.core.config import EmailSettings

from .models import AlertSeverity, EmailMessage

logger = logging.getLogger(__name__)

SEVERITY_LABELS = {
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
}


class EmailService:
    """Sends mail through Resend when selected and configured, else through SMTP.

    Every public method reports success as a bool and never raises.
    """

    def __init__(self, settings: EmailSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def provider(self) -> str:
        return self.settings.provider

    @property
    def default_sender(self) -> str:
        return f"{self.settings.from_name} <{self.settings.from_address}>"

    def resend_configured(self) -> bool:
        return bool(self.settings.resend_api_key)

    def smtp_configured(self) -> bool:
        return bool(self.settings.smtp_host and self.settings.smtp_user and self.settings.smtp_password)

    async def send_email(self, message: EmailMessage) -> bool:
        if self.provider == "resend" and self.resend_configured():
            if await self._send_via_resend(message):
                return True
            logger.warning("Resend delivery failed, falling back to SMTP")
        return await self._send_via_smtp(message)

    async def send_alert(
        self,
        to: str | list[str],
        title: str,
        message: str,
        severity: AlertSeverity = "info",
    ) -> bool:
        recipients = [to] if isinstance(to, str) else list(to)
        html = (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
            f"<h2>[{SEVERITY_LABELS[severity]}] {escape(title)}</h2>"
            f"<p>{escape(message)}</p>"
            "</div>"
        )
        return await self.send_email(
            EmailMessage(
                to=recipients,
                subject=f"[{severity.upper()}] {title}",
                text=f"{title}\n\n{message}",
                html=html,
            )
        )

    async def _send_via_resend(self, message: EmailMessage) -> bool:
        payload = {
            "from": message.from_address or self.default_sender,
            "to": message.to,
            "subject": message.subject,
            "reply_to": self.settings.reply_to,
        }
        if message.text:
            payload["text"] = message.text
        if message.html:
            payload["html"] = message.html
        if message.cc:
            payload["cc"] = message.cc
        if message.bcc:
            payload["bcc"] = message.bcc

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.resend_base_url,
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.settings.resend_api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.error("Failed to send email via Resend: %s", exc)
            return False

        if response.is_error:
            logger.error("Resend email error: %s %s", response.status_code, response.text)
            return False
        logger.info("Email sent via Resend to %s", ", ".join(message.to))
        return True

    async def _send_via_smtp(self, message: EmailMessage) -> bool:
        if not self.smtp_configured():
            logger.warning("SMTP is not configured, dropping email %r", message.subject)
            return False
        try:
            await asyncio.to_thread(self._smtp_send, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send email via SMTP: %s", exc)
            return False
        logger.info("Email sent via SMTP to %s", ", ".join(message.to))
        return True

    def _smtp_send(self, message: EmailMessage) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = message.from_address or self.default_sender
        msg["To"] = ", ".join(message.to)
        msg["Reply-To"] = self.settings.reply_to
        if message.cc:
            msg["Cc"] = ", ".join(message.cc)
        msg.attach(MIMEText(message.text or "", "plain"))
        if message.html:
            msg.attach(MIMEText(message.html, "html"))

        assert self.settings.smtp_host is not None
        with smtplib.SMTP(
            self.settings.smtp_host,
            self.settings.smtp_port,
            timeout=self.settings.timeout_seconds,
        ) as server:
            if self.settings.smtp_use_tls:
                server.starttls()
            server.login(self.settings.smtp_user or "", self.settings.smtp_password or "")
            server.send_message(msg, to_addrs=[*message.to, *message.cc, *message.bcc])

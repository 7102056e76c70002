"""Slack incoming-webhook client."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from .models import AlertSeverity

logger = logging.getLogger(__name__)

ALERT_COLORS = {
    "info": "#36a64f",
    "warning": "#ff9500",
    "error": "#ff0000",
}


class SlackWebhookClient:
    def __init__(
        self,
        webhook_url: str,
        *,
        default_channel: Optional[str] = None,
        username: str = "Jobs2Go Bot",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.default_channel = default_channel
        self.username = username
        self.timeout = timeout
        self._transport = transport

    async def send_message(
        self,
        text: str,
        *,
        attachments: Optional[list[dict[str, Any]]] = None,
        channel: Optional[str] = None,
        icon_emoji: str = ":robot_face:",
    ) -> bool:
        payload: dict[str, Any] = {
            "username": self.username,
            "icon_emoji": icon_emoji,
            "text": text,
        }
        if channel or self.default_channel:
            payload["channel"] = channel or self.default_channel
        if attachments:
            payload["attachments"] = attachments

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Failed to send Slack message: %s", exc)
            return False

        if response.is_error:
            logger.error("Slack webhook rejected message: %s %s", response.status_code, response.text)
            return False
        return True

    async def send_alert(self, title: str, message: str, severity: AlertSeverity = "info") -> bool:
        return await self.send_message(
            f"Alert: {title}",
            attachments=[
                {
                    "color": ALERT_COLORS[severity],
                    "title": title,
                    "text": message,
                    "fields": [
                        {"title": "Severity", "value": severity.upper(), "short": True},
                        {
                            "title": "Timestamp",
                            "value": datetime.now(timezone.utc).isoformat(),
                            "short": True,
                        },
                    ],
                }
            ],
        )

"""Event tracking with periodic flushing and alert fan-out.

One ``MonitoringService`` lives on the application container. The lifespan
calls ``start()`` and ``shutdown()``; nothing here is a module-level
singleton.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

from jobs2go_admin.core.config import Settings
from jobs2go_admin.modules.notifications import EmailService, SlackWebhookClient

from .models import ALERT_SEVERITIES, MonitoringEvent

logger = logging.getLogger(__name__)


def format_event_details(event: MonitoringEvent, environment: str) -> str:
    lines = [f"*{event.message}*", ""]
    if event.details:
        lines.append("*Details:*")
        lines.extend(f"• {key}: {json.dumps(value, default=str)}" for key, value in event.details.items())
        lines.append("")
    lines.append(f"*Category:* {event.category}")
    lines.append(f"*Severity:* {event.severity}")
    lines.append(f"*Timestamp:* {event.timestamp.isoformat()}")
    if event.source:
        lines.append(f"*Source:* {event.source}")
    if event.user_id:
        lines.append(f"*User ID:* {event.user_id}")
    if event.request_id:
        lines.append(f"*Request ID:* {event.request_id}")
    lines.append(f"*Environment:* {environment}")
    return "\n".join(lines)


class MonitoringService:
    def __init__(
        self,
        settings: Settings,
        *,
        slack: Optional[SlackWebhookClient] = None,
        email: Optional[EmailService] = None,
    ) -> None:
        self.settings = settings
        self.slack = slack
        self.email = email
        self._buffer: list[MonitoringEvent] = []
        self._flush_task: Optional[asyncio.Task[None]] = None
        self._alert_tasks: set[asyncio.Task[None]] = set()
        self.flushed_count = 0

    @property
    def buffered_events(self) -> list[MonitoringEvent]:
        return list(self._buffer)

    @property
    def running(self) -> bool:
        return self._flush_task is not None and not self._flush_task.done()

    def track_event(self, event: MonitoringEvent) -> None:
        self._buffer.append(event)
        if event.severity in ALERT_SEVERITIES:
            self._schedule_alert(event)
        if self.settings.is_development:
            logger.info("[%s] %s: %s", event.severity.upper(), event.category, event.message)

    def track_error(
        self,
        message: str,
        exc: BaseException,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        payload = dict(details or {})
        payload["errorType"] = type(exc).__name__
        payload["errorMessage"] = str(exc)
        self.track_event(MonitoringEvent(category="error", severity="error", message=message, details=payload))

    async def start(self) -> None:
        if self.running:
            return
        self._flush_task = asyncio.create_task(self._flush_loop(), name="monitoring-flush")
        logger.info("Monitoring flush task started (every %ss)", self.settings.monitoring.flush_interval_seconds)

    async def shutdown(self) -> None:
        if self._flush_task is not None:
            self._flush_task.cancel()
            try:
                await self._flush_task
            except asyncio.CancelledError:
                pass
            self._flush_task = None
        if self._alert_tasks:
            await asyncio.gather(*self._alert_tasks, return_exceptions=True)
        await self.flush()
        logger.info("Monitoring service stopped")

    async def flush(self) -> int:
        if not self._buffer:
            return 0
        events, self._buffer = self._buffer, []
        try:
            self._persist(events)
        except Exception:
            logger.exception("Failed to flush %d monitoring events", len(events))
            self._buffer = events + self._buffer
            return 0
        self.flushed_count += len(events)
        return len(events)

    def _persist(self, events: list[MonitoringEvent]) -> None:
        # events are only written to the log; no external sink is wired
        for event in events:
            logger.debug("monitoring event %s/%s: %s", event.category, event.severity, event.message)
        logger.info("Flushed %d monitoring events", len(events))

    async def _flush_loop(self) -> None:
        interval = self.settings.monitoring.flush_interval_seconds
        while True:
            await asyncio.sleep(interval)
            await self.flush()

    def _schedule_alert(self, event: MonitoringEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, alert for '%s' dropped", event.message)
            return
        task = loop.create_task(self.send_alert(event))
        self._alert_tasks.add(task)
        task.add_done_callback(self._alert_tasks.discard)

    async def send_alert(self, event: MonitoringEvent) -> None:
        title = f"[{event.severity.upper()}] {event.category}: {event.message}"
        body = format_event_details(event, self.settings.environment)
        recipients = self.settings.email.alert_recipients
        try:
            if self.slack is not None and self.slack.webhook_url:
                await self.slack.send_alert(title, body, "error")
            if self.email is not None and recipients:
                await self.email.send_alert(recipients, title, body, "error")
        except Exception:
            logger.exception("Failed to send alert for monitoring event")

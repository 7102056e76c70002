"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from jobs2go_admin.core.config import Settings
from jobs2go_admin.infrastructure.database.session import get_engine
from jobs2go_admin.modules.monitoring import MonitoringService
from jobs2go_admin.modules.notifications import EmailService, Notifier, SlackWebhookClient, SourceMapNotifier
from jobs2go_admin.modules.permissions import InMemoryPermissionCache, PermissionCache


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    permission_cache: PermissionCache
    email_service: EmailService
    slack: Optional[SlackWebhookClient]
    notifier: Notifier
    monitoring: MonitoringService

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()


def build_container(settings: Settings) -> ApplicationContainer:
    email_service = EmailService(settings.email)
    slack = None
    if settings.slack.webhook_url:
        slack = SlackWebhookClient(
            settings.slack.webhook_url,
            default_channel=settings.slack.default_channel,
            username=settings.slack.username,
            timeout=settings.slack.timeout_seconds,
        )
    notifier = SourceMapNotifier(
        slack=slack,
        email=email_service,
        sender=settings.email.from_address,
        admin_email=settings.email.admin_email,
    )
    container = ApplicationContainer(
        settings=settings,
        permission_cache=InMemoryPermissionCache(ttl_seconds=settings.permissions.cache_ttl_seconds),
        email_service=email_service,
        slack=slack,
        notifier=notifier,
        monitoring=MonitoringService(settings, slack=slack, email=email_service),
    )
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_container"]

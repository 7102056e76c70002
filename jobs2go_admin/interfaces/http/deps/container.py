"""Accessors for the application container stored on ``app.state``."""

from fastapi import Depends, Request

from jobs2go_admin.core.config import Settings
from jobs2go_admin.core.container import ApplicationContainer
from jobs2go_admin.modules.monitoring import MonitoringService
from jobs2go_admin.modules.notifications import EmailService, Notifier


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_settings_dep(container: ApplicationContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_notifier(container: ApplicationContainer = Depends(get_container)) -> Notifier:
    return container.notifier


def get_email_service(container: ApplicationContainer = Depends(get_container)) -> EmailService:
    return container.email_service


def get_monitoring(container: ApplicationContainer = Depends(get_container)) -> MonitoringService:
    return container.monitoring


__all__ = [
    "get_container",
    "get_email_service",
    "get_monitoring",
    "get_notifier",
    "get_settings_dep",
]

"""Reusable FastAPI dependencies."""

from .account import get_account_repository, get_account_service, get_permission_service
from .container import get_container, get_email_service, get_monitoring, get_notifier, get_settings_dep
from .database import get_db_session
from .services import get_schedule_service, get_sharing_service, get_template_service

__all__ = [
    "get_account_repository",
    "get_account_service",
    "get_container",
    "get_db_session",
    "get_email_service",
    "get_monitoring",
    "get_notifier",
    "get_permission_service",
    "get_schedule_service",
    "get_settings_dep",
    "get_sharing_service",
    "get_template_service",
]

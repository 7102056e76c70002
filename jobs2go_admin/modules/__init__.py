"""Feature modules and their public exports."""

from . import accounts, monitoring, notifications, permissions, schedules, templates

__all__ = [
    "accounts",
    "monitoring",
    "notifications",
    "permissions",
    "schedules",
    "templates",
]

"""Repository implementations backed by SQLAlchemy."""

from .account_repository import SqlAccountRepository
from .schedule_repository import SqlScheduleRepository
from .template_repository import SqlTemplateRepository

__all__ = [
    "SqlAccountRepository",
    "SqlScheduleRepository",
    "SqlTemplateRepository",
]

"""Cleanup schedule configuration records."""

from .exceptions import ScheduleError, ScheduleNotFoundError, ScheduleValidationError
from .models import CleanupSchedule, ScheduleCreateInput, ScheduleUpdateInput
from .service import ScheduleService, cron_for_template, schedule_from_template

__all__ = [
    "CleanupSchedule",
    "ScheduleCreateInput",
    "ScheduleError",
    "ScheduleNotFoundError",
    "ScheduleService",
    "ScheduleUpdateInput",
    "ScheduleValidationError",
    "cron_for_template",
    "schedule_from_template",
]

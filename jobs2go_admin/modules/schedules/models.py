"""Domain models for cleanup schedules."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Mapping, Optional

from .exceptions import ScheduleValidationError

# Sentinel used to differentiate between "not provided" and explicit None.
UNSET: Any = object()

MIN_NAME_LENGTH = 3
MIN_CRON_LENGTH = 9


@dataclass(slots=True)
class CleanupSchedule:
    id: str
    name: str
    description: str
    retention_days: int
    min_versions_to_keep: int
    cron_schedule: str
    dry_run: bool
    delete_from_storage: bool
    delete_from_database: bool
    notify_on_completion: bool
    notification_channels: list[str]
    template_id: Optional[str]
    is_active: bool
    created_by: str
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class ScheduleCreateInput:
    name: str
    retention_days: int
    min_versions_to_keep: int
    cron_schedule: str
    description: str = ""
    dry_run: bool = False
    delete_from_storage: bool = True
    delete_from_database: bool = True
    notify_on_completion: bool = True
    notification_channels: list[str] = field(default_factory=list)
    template_id: Optional[str] = None
    is_active: bool = True

    def values(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ScheduleUpdateInput:
    name: Any = UNSET
    description: Any = UNSET
    retention_days: Any = UNSET
    min_versions_to_keep: Any = UNSET
    cron_schedule: Any = UNSET
    dry_run: Any = UNSET
    delete_from_storage: Any = UNSET
    delete_from_database: Any = UNSET
    notify_on_completion: Any = UNSET
    notification_channels: Any = UNSET
    template_id: Any = UNSET
    is_active: Any = UNSET

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ScheduleUpdateInput":
        known = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})

    def provided(self) -> dict[str, Any]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not UNSET
        }


def validate_schedule_values(values: Mapping[str, Any]) -> None:
    """Check the field rules shared by create, update and template seeding."""
    name = values.get("name")
    if name is not None and len(name) < MIN_NAME_LENGTH:
        raise ScheduleValidationError("Name must be at least 3 characters.")
    for key, label in (("retention_days", "Retention days"), ("min_versions_to_keep", "Minimum versions to keep")):
        value = values.get(key)
        if value is not None and value < 1:
            raise ScheduleValidationError(f"{label} must be at least 1.")
    cron = values.get("cron_schedule")
    if cron is not None and (len(cron) < MIN_CRON_LENGTH or len(cron.split()) != 5):
        raise ScheduleValidationError("Please provide a valid cron schedule.")

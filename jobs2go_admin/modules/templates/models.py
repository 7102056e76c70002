"""Domain models for cleanup templates and their version history."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional

FREQUENCIES = ("DAILY", "WEEKLY", "MONTHLY")

# Sentinel used to differentiate between "not provided" and explicit None.
UNSET: Any = object()

# Fields captured by every version snapshot, in column order.
VERSIONED_FIELDS = (
    "name",
    "description",
    "frequency",
    "day_of_week",
    "day_of_month",
    "hour",
    "minute",
    "retention_days",
    "min_deployments_to_keep",
    "dry_run",
    "storage_provider",
    "notify_on_success",
    "notify_on_failure",
    "notification_recipients",
    "tags",
)


@dataclass(slots=True)
class TemplateVersion:
    id: str
    template_id: str
    version_number: int
    name: str
    description: Optional[str]
    frequency: str
    day_of_week: Optional[int]
    day_of_month: Optional[int]
    hour: int
    minute: int
    retention_days: int
    min_deployments_to_keep: int
    dry_run: bool
    storage_provider: str
    notify_on_success: bool
    notify_on_failure: bool
    notification_recipients: list[str]
    tags: list[str]
    change_description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in VERSIONED_FIELDS}


@dataclass(slots=True)
class CleanupTemplate:
    id: str
    name: str
    description: Optional[str]
    frequency: str
    day_of_week: Optional[int]
    day_of_month: Optional[int]
    hour: int
    minute: int
    retention_days: int
    min_deployments_to_keep: int
    dry_run: bool
    storage_provider: str
    notify_on_success: bool
    notify_on_failure: bool
    notification_recipients: list[str]
    tags: list[str]
    is_built_in: bool
    current_version_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    current_version: Optional[TemplateVersion] = None
    versions: list[TemplateVersion] = field(default_factory=list)

    def snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in VERSIONED_FIELDS}


@dataclass(slots=True)
class TemplateCreateInput:
    name: str
    frequency: str
    hour: int
    minute: int
    retention_days: int
    min_deployments_to_keep: int
    description: Optional[str] = None
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    dry_run: bool = False
    storage_provider: str = "s3"
    notify_on_success: bool = False
    notify_on_failure: bool = True
    notification_recipients: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_by: Optional[str] = None

    def snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in VERSIONED_FIELDS}


@dataclass(slots=True)
class TemplateUpdateInput:
    name: str | object = UNSET
    description: Optional[str] | object = UNSET
    frequency: str | object = UNSET
    day_of_week: Optional[int] | object = UNSET
    day_of_month: Optional[int] | object = UNSET
    hour: int | object = UNSET
    minute: int | object = UNSET
    retention_days: int | object = UNSET
    min_deployments_to_keep: int | object = UNSET
    dry_run: bool | object = UNSET
    storage_provider: str | object = UNSET
    notify_on_success: bool | object = UNSET
    notify_on_failure: bool | object = UNSET
    notification_recipients: list[str] | object = UNSET
    tags: list[str] | object = UNSET
    change_description: Optional[str] = None
    created_by: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "TemplateUpdateInput":
        known = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})

    def merged_with(self, current: dict[str, Any]) -> dict[str, Any]:
        """Return a full snapshot: provided fields win, the rest keep their current value."""
        merged: dict[str, Any] = {}
        for name in VERSIONED_FIELDS:
            value = getattr(self, name)
            merged[name] = current[name] if value is UNSET else value
        return merged

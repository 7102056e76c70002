"""Cleanup schedule use cases.

Schedules are inert configuration: nothing here computes ``next_run`` or
executes a cleanup.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.modules.templates.models import CleanupTemplate

from .exceptions import ScheduleNotFoundError, ScheduleValidationError
from .models import CleanupSchedule, ScheduleCreateInput, ScheduleUpdateInput, validate_schedule_values
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

DEFAULT_CREATED_BY = "system"


def cron_for_template(template: CleanupTemplate) -> str:
    if template.frequency == "WEEKLY":
        return f"{template.minute} {template.hour} * * {template.day_of_week}"
    if template.frequency == "MONTHLY":
        return f"{template.minute} {template.hour} {template.day_of_month} * *"
    return f"{template.minute} {template.hour} * * *"


def schedule_from_template(
    template: CleanupTemplate,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ScheduleCreateInput:
    """Seed schedule input from a template; ``overrides`` win over the derived values."""
    if template.frequency == "WEEKLY" and template.day_of_week is None:
        raise ScheduleValidationError("Weekly template has no day of week")
    if template.frequency == "MONTHLY" and template.day_of_month is None:
        raise ScheduleValidationError("Monthly template has no day of month")

    data = ScheduleCreateInput(
        name=f"{template.name} Schedule",
        description=template.description or "",
        retention_days=template.retention_days,
        min_versions_to_keep=template.min_deployments_to_keep,
        cron_schedule=cron_for_template(template),
        dry_run=template.dry_run,
        notify_on_completion=template.notify_on_success or template.notify_on_failure,
        notification_channels=["email"] if template.notification_recipients else [],
        template_id=template.id,
    )
    if overrides:
        data = replace(data, **{key: value for key, value in overrides.items() if value is not None})
    return data


class ScheduleService:
    def __init__(self, repository: ScheduleRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ScheduleService":
        from jobs2go_admin.infrastructure.database.repositories.schedule_repository import SqlScheduleRepository

        return cls(SqlScheduleRepository(session))

    async def list_schedules(self) -> list[CleanupSchedule]:
        return list(await self._repository.list_schedules())

    async def get_schedule(self, schedule_id: str) -> CleanupSchedule:
        schedule = await self._repository.get_by_id(schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError("Schedule not found")
        return schedule

    async def create_schedule(self, data: ScheduleCreateInput, created_by: Optional[str] = None) -> CleanupSchedule:
        values = data.values()
        validate_schedule_values(values)
        schedule = await self._repository.create_schedule(values, created_by or DEFAULT_CREATED_BY)
        logger.info("Created cleanup schedule %s (%s)", schedule.id, schedule.name)
        return schedule

    async def create_from_template(
        self,
        template: CleanupTemplate,
        overrides: Optional[Mapping[str, Any]] = None,
        created_by: Optional[str] = None,
    ) -> CleanupSchedule:
        return await self.create_schedule(schedule_from_template(template, overrides), created_by)

    async def update_schedule(self, schedule_id: str, data: ScheduleUpdateInput) -> CleanupSchedule:
        await self.get_schedule(schedule_id)
        values = data.provided()
        validate_schedule_values(values)
        if not values:
            return await self.get_schedule(schedule_id)
        return await self._repository.update_schedule(schedule_id, values)

    async def set_active(self, schedule_id: str, is_active: bool) -> CleanupSchedule:
        return await self.update_schedule(schedule_id, ScheduleUpdateInput(is_active=is_active))

    async def delete_schedule(self, schedule_id: str) -> None:
        if not await self._repository.delete_schedule(schedule_id):
            raise ScheduleNotFoundError("Schedule not found")
        logger.info("Deleted cleanup schedule %s", schedule_id)

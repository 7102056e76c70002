"""SQLAlchemy implementation for cleanup schedule repository."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.db.models import CleanupSchedule as CleanupScheduleModel
from jobs2go_admin.modules.schedules.exceptions import ScheduleNotFoundError
from jobs2go_admin.modules.schedules.models import CleanupSchedule
from jobs2go_admin.modules.schedules.repository import ScheduleRepository


class SqlScheduleRepository(ScheduleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_schedules(self) -> Sequence[CleanupSchedule]:
        stmt = select(CleanupScheduleModel).order_by(CleanupScheduleModel.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_by_id(self, schedule_id: str) -> CleanupSchedule | None:
        model = await self.session.get(CleanupScheduleModel, schedule_id)
        return self._to_domain(model) if model else None

    async def create_schedule(self, values: Mapping[str, Any], created_by: str) -> CleanupSchedule:
        model = CleanupScheduleModel(**values, created_by=created_by)
        model.notification_channels = list(values.get("notification_channels") or [])
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def update_schedule(self, schedule_id: str, values: Mapping[str, Any]) -> CleanupSchedule:
        model = await self.session.get(CleanupScheduleModel, schedule_id)
        if model is None:
            raise ScheduleNotFoundError("Schedule not found")
        for key, value in values.items():
            if key == "notification_channels":
                value = list(value or [])
            setattr(model, key, value)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def delete_schedule(self, schedule_id: str) -> bool:
        result = await self.session.execute(
            delete(CleanupScheduleModel).where(CleanupScheduleModel.id == schedule_id)
        )
        return result.rowcount > 0

    @staticmethod
    def _to_domain(model: CleanupScheduleModel) -> CleanupSchedule:
        return CleanupSchedule(
            id=model.id,
            name=model.name,
            description=model.description or "",
            retention_days=model.retention_days,
            min_versions_to_keep=model.min_versions_to_keep,
            cron_schedule=model.cron_schedule,
            dry_run=bool(model.dry_run),
            delete_from_storage=bool(model.delete_from_storage),
            delete_from_database=bool(model.delete_from_database),
            notify_on_completion=bool(model.notify_on_completion),
            notification_channels=list(model.notification_channels or []),
            template_id=model.template_id,
            is_active=bool(model.is_active),
            created_by=model.created_by,
            last_run=model.last_run,
            next_run=model.next_run,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

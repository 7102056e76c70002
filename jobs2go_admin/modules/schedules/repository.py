"""Repository protocol for cleanup schedules."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .models import CleanupSchedule


class ScheduleRepository(Protocol):
    async def list_schedules(self) -> Sequence[CleanupSchedule]:
        ...

    async def get_by_id(self, schedule_id: str) -> CleanupSchedule | None:
        ...

    async def create_schedule(self, values: Mapping[str, Any], created_by: str) -> CleanupSchedule:
        ...

    async def update_schedule(self, schedule_id: str, values: Mapping[str, Any]) -> CleanupSchedule:
        ...

    async def delete_schedule(self, schedule_id: str) -> bool:
        ...

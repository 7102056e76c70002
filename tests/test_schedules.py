from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.modules.schedules import (
    ScheduleCreateInput,
    ScheduleNotFoundError,
    ScheduleService,
    ScheduleUpdateInput,
    ScheduleValidationError,
)
from jobs2go_admin.modules.schedules.models import validate_schedule_values
from jobs2go_admin.modules.schedules.service import cron_for_template, schedule_from_template
from jobs2go_admin.modules.templates import CleanupTemplate


def _template(**overrides) -> CleanupTemplate:
    values = {
        "id": "tpl-1",
        "name": "Weekly Archiving",
        "description": "Weekly cleanup",
        "frequency": "WEEKLY",
        "day_of_week": 0,
        "day_of_month": None,
        "hour": 2,
        "minute": 15,
        "retention_days": 30,
        "min_deployments_to_keep": 5,
        "dry_run": False,
        "storage_provider": "s3",
        "notify_on_success": False,
        "notify_on_failure": True,
        "notification_recipients": ["ops@example.com"],
        "tags": ["weekly"],
        "is_built_in": False,
    }
    values.update(overrides)
    return CleanupTemplate(**values)


def _schedule_input(**overrides) -> ScheduleCreateInput:
    values = {
        "name": "Nightly purge",
        "retention_days": 14,
        "min_versions_to_keep": 3,
        "cron_schedule": "0 3 * * *",
    }
    values.update(overrides)
    return ScheduleCreateInput(**values)


@pytest.fixture
def schedule_service(session: AsyncSession) -> ScheduleService:
    return ScheduleService.with_session(session)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"frequency": "DAILY", "day_of_week": None}, "15 2 * * *"),
        ({}, "15 2 * * 0"),
        ({"frequency": "MONTHLY", "day_of_week": None, "day_of_month": 1}, "15 2 1 * *"),
    ],
)
def test_cron_for_template(overrides, expected) -> None:
    assert cron_for_template(_template(**overrides)) == expected


@pytest.mark.unit
def test_schedule_from_template_maps_fields() -> None:
    data = schedule_from_template(_template())

    assert data.name == "Weekly Archiving Schedule"
    assert data.description == "Weekly cleanup"
    assert data.retention_days == 30
    assert data.min_versions_to_keep == 5
    assert data.cron_schedule == "15 2 * * 0"
    assert data.notify_on_completion is True
    assert data.notification_channels == ["email"]
    assert data.template_id == "tpl-1"
    assert data.is_active is True


@pytest.mark.unit
def test_schedule_from_template_without_notifications() -> None:
    data = schedule_from_template(
        _template(notify_on_failure=False, notification_recipients=[], description=None)
    )

    assert data.notify_on_completion is False
    assert data.notification_channels == []
    assert data.description == ""


@pytest.mark.unit
def test_schedule_from_template_applies_overrides_but_ignores_none() -> None:
    data = schedule_from_template(_template(), {"name": "Custom", "dry_run": True, "cron_schedule": None})

    assert data.name == "Custom"
    assert data.dry_run is True
    assert data.cron_schedule == "15 2 * * 0"


@pytest.mark.unit
def test_schedule_from_template_rejects_incomplete_recurrence() -> None:
    with pytest.raises(ScheduleValidationError):
        schedule_from_template(_template(day_of_week=None))
    with pytest.raises(ScheduleValidationError):
        schedule_from_template(_template(frequency="MONTHLY", day_of_week=None, day_of_month=None))


@pytest.mark.unit
@pytest.mark.parametrize(
    ("values", "message"),
    [
        ({"name": "ab"}, "Name must be at least 3 characters."),
        ({"retention_days": 0}, "Retention days must be at least 1."),
        ({"min_versions_to_keep": 0}, "Minimum versions to keep must be at least 1."),
        ({"cron_schedule": "* * *"}, "Please provide a valid cron schedule."),
        ({"cron_schedule": "0 3 * * * *"}, "Please provide a valid cron schedule."),
    ],
)
def test_validate_schedule_values(values, message) -> None:
    with pytest.raises(ScheduleValidationError, match=message):
        validate_schedule_values(values)


@pytest.mark.unit
def test_update_input_tracks_provided_fields() -> None:
    data = ScheduleUpdateInput.from_mapping({"name": "Renamed", "template_id": None, "unknown": 1})

    assert data.provided() == {"name": "Renamed", "template_id": None}


@pytest.mark.integration
async def test_create_and_get_schedule(schedule_service: ScheduleService) -> None:
    created = await schedule_service.create_schedule(_schedule_input(notification_channels=["slack"]))

    assert created.created_by == "system"
    assert created.delete_from_storage is True
    assert created.notification_channels == ["slack"]

    fetched = await schedule_service.get_schedule(created.id)
    assert fetched.name == "Nightly purge"
    assert [schedule.id for schedule in await schedule_service.list_schedules()] == [created.id]


@pytest.mark.integration
async def test_create_schedule_rejects_invalid_values(schedule_service: ScheduleService) -> None:
    with pytest.raises(ScheduleValidationError):
        await schedule_service.create_schedule(_schedule_input(retention_days=0))

    assert await schedule_service.list_schedules() == []


@pytest.mark.integration
async def test_update_and_toggle_schedule(schedule_service: ScheduleService) -> None:
    created = await schedule_service.create_schedule(_schedule_input(), created_by="ops@example.com")

    updated = await schedule_service.update_schedule(
        created.id,
        ScheduleUpdateInput(cron_schedule="30 4 * * 1", notification_channels=["email"]),
    )
    assert updated.cron_schedule == "30 4 * * 1"
    assert updated.notification_channels == ["email"]
    assert updated.name == "Nightly purge"
    assert updated.created_by == "ops@example.com"

    paused = await schedule_service.set_active(created.id, False)
    assert paused.is_active is False


@pytest.mark.integration
async def test_update_with_no_fields_returns_current(schedule_service: ScheduleService) -> None:
    created = await schedule_service.create_schedule(_schedule_input())

    unchanged = await schedule_service.update_schedule(created.id, ScheduleUpdateInput())

    assert unchanged.name == created.name


@pytest.mark.integration
async def test_missing_schedule_raises(schedule_service: ScheduleService) -> None:
    with pytest.raises(ScheduleNotFoundError, match="Schedule not found"):
        await schedule_service.get_schedule("missing")
    with pytest.raises(ScheduleNotFoundError):
        await schedule_service.update_schedule("missing", ScheduleUpdateInput(name="Whatever"))
    with pytest.raises(ScheduleNotFoundError):
        await schedule_service.delete_schedule("missing")


@pytest.mark.integration
async def test_delete_schedule(schedule_service: ScheduleService) -> None:
    created = await schedule_service.create_schedule(_schedule_input())

    await schedule_service.delete_schedule(created.id)

    with pytest.raises(ScheduleNotFoundError):
        await schedule_service.get_schedule(created.id)


@pytest.mark.integration
async def test_create_from_template_keeps_link(schedule_service: ScheduleService, template_service, template_input) -> None:
    template = await template_service.create_template(
        template_input(frequency="MONTHLY", day_of_month=15, notification_recipients=["ops@example.com"])
    )

    schedule = await schedule_service.create_from_template(template, {"dry_run": True}, created_by="ops@example.com")

    assert schedule.template_id == template.id
    assert schedule.cron_schedule == "30 2 15 * *"
    assert schedule.dry_run is True
    assert schedule.notification_channels == ["email"]


@pytest.mark.integration
async def test_list_schedules_newest_first(schedule_service: ScheduleService) -> None:
    for index in range(6):
        await schedule_service.create_schedule(_schedule_input(name=f"Schedule {index}"))

    names = [schedule.name for schedule in await schedule_service.list_schedules()]

    assert names == [f"Schedule {index}" for index in reversed(range(6))]

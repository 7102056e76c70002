"""Source-map cleanup schedule endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, status

from jobs2go_admin.core.security import require_permission
from jobs2go_admin.interfaces.http.deps import get_schedule_service, get_template_service
from jobs2go_admin.modules.accounts import Account
from jobs2go_admin.modules.schedules import ScheduleCreateInput, ScheduleService, ScheduleUpdateInput
from jobs2go_admin.modules.templates import TemplateNotFoundError, TemplateService
from jobs2go_admin.schemas import (
    DeleteResponse,
    ScheduleCreateRequest,
    ScheduleFromTemplateRequest,
    ScheduleResponse,
    ScheduleUpdateRequest,
)

router = APIRouter()


def _actor(account: Account) -> str:
    return account.email or account.username


@router.get("", response_model=list[ScheduleResponse], summary="List cleanup schedules, newest first")
async def list_schedules(
    _: Account = Depends(require_permission("source_maps:read")),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.list_schedules()


@router.post("", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED, summary="Create a schedule")
async def create_schedule(
    payload: ScheduleCreateRequest,
    account: Account = Depends(require_permission("source_maps:write")),
    service: ScheduleService = Depends(get_schedule_service),
):
    values = payload.model_dump()
    values["description"] = values["description"] or ""
    values["template_id"] = values["template_id"] or None
    return await service.create_schedule(ScheduleCreateInput(**values), created_by=_actor(account))


@router.post(
    "/from-template/{template_id}",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a schedule seeded from a template",
)
async def create_schedule_from_template(
    template_id: str,
    payload: Optional[ScheduleFromTemplateRequest] = None,
    account: Account = Depends(require_permission("source_maps:write")),
    service: ScheduleService = Depends(get_schedule_service),
    templates: TemplateService = Depends(get_template_service),
):
    template = await templates.get_template(template_id)
    if template is None:
        raise TemplateNotFoundError("Template not found")
    overrides = payload.model_dump(exclude_none=True) if payload else None
    return await service.create_from_template(template, overrides, created_by=_actor(account))


@router.get("/{schedule_id}", response_model=ScheduleResponse, summary="Get a schedule")
async def get_schedule(
    schedule_id: str,
    _: Account = Depends(require_permission("source_maps:read")),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.get_schedule(schedule_id)


@router.put("/{schedule_id}", response_model=ScheduleResponse, summary="Update a schedule")
async def update_schedule(
    schedule_id: str,
    payload: ScheduleUpdateRequest,
    _: Account = Depends(require_permission("source_maps:write")),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.update_schedule(schedule_id, ScheduleUpdateInput.from_mapping(payload.provided_values()))


@router.delete("/{schedule_id}", response_model=DeleteResponse, summary="Delete a schedule")
async def delete_schedule(
    schedule_id: str,
    _: Account = Depends(require_permission("source_maps:delete")),
    service: ScheduleService = Depends(get_schedule_service),
) -> DeleteResponse:
    await service.delete_schedule(schedule_id)
    return DeleteResponse()

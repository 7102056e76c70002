"""Cleanup template endpoints: CRUD, version history, export and import."""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from jobs2go_admin.core.security import require_permission
from jobs2go_admin.interfaces.http.deps import get_sharing_service, get_template_service
from jobs2go_admin.modules.accounts import Account
from jobs2go_admin.modules.templates import (
    TemplateCreateInput,
    TemplateNotFoundError,
    TemplateService,
    TemplateSharingService,
    TemplateUpdateInput,
)
from jobs2go_admin.schemas import (
    DeleteResponse,
    ImportResultResponse,
    TemplateCreateRequest,
    TemplateDetailResponse,
    TemplateExportRequest,
    TemplateResponse,
    TemplateUpdateRequest,
    TemplateVersionResponse,
)

router = APIRouter()

CUSTOM_TAG = "custom"


def _actor(account: Account) -> str:
    return account.email or account.username


@router.get("", response_model=list[TemplateResponse], summary="List cleanup templates")
async def list_templates(
    include_built_in: bool = Query(True, alias="includeBuiltIn"),
    tags: Optional[list[str]] = Query(None),
    q: Optional[str] = Query(None, min_length=1),
    _: Account = Depends(require_permission("templates:read")),
    service: TemplateService = Depends(get_template_service),
):
    if q:
        templates = await service.search_templates(q)
    elif tags:
        templates = await service.get_templates_by_tags(tags)
    else:
        return await service.list_templates(include_built_in=include_built_in)
    if not include_built_in:
        templates = [template for template in templates if not template.is_built_in]
    return templates


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED, summary="Create a template")
async def create_template(
    payload: TemplateCreateRequest,
    account: Account = Depends(require_permission("templates:write")),
    service: TemplateService = Depends(get_template_service),
):
    values = payload.model_dump()
    if CUSTOM_TAG not in values["tags"]:
        values["tags"].append(CUSTOM_TAG)
    return await service.create_template(TemplateCreateInput(**values, created_by=_actor(account)))


@router.get("/export", summary="Export one template as a sharing document")
async def export_template(
    template_id: Optional[str] = Query(None, alias="id"),
    _: Account = Depends(require_permission("templates:read")),
    sharing: TemplateSharingService = Depends(get_sharing_service),
) -> dict[str, Any]:
    if not template_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Template ID is required")
    return await sharing.export_template(template_id)


@router.post("/export", summary="Export several templates as one sharing document")
async def export_templates(
    payload: TemplateExportRequest,
    _: Account = Depends(require_permission("templates:read")),
    sharing: TemplateSharingService = Depends(get_sharing_service),
) -> dict[str, Any]:
    return await sharing.export_templates(payload.template_ids)


@router.post("/import", response_model=ImportResultResponse, summary="Import templates from a sharing document")
async def import_templates(
    document: Any = Body(...),
    account: Account = Depends(require_permission("templates:write")),
    sharing: TemplateSharingService = Depends(get_sharing_service),
):
    if not document:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Import data is required")
    result = await sharing.import_templates(document, created_by=_actor(account))
    body = ImportResultResponse.model_validate(result).model_dump(by_alias=True)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Import partially failed", "details": body},
        )
    return body


@router.get("/{template_id}", response_model=TemplateDetailResponse, summary="Template with its version history")
async def get_template(
    template_id: str,
    _: Account = Depends(require_permission("templates:read")),
    service: TemplateService = Depends(get_template_service),
):
    template = await service.get_template(template_id, include_versions=True)
    if template is None:
        raise TemplateNotFoundError("Template not found")
    return template


@router.put("/{template_id}", response_model=TemplateResponse, summary="Update a template (adds a version)")
async def update_template(
    template_id: str,
    payload: TemplateUpdateRequest,
    account: Account = Depends(require_permission("templates:write")),
    service: TemplateService = Depends(get_template_service),
):
    data = TemplateUpdateInput.from_mapping(payload.model_dump(exclude_unset=True))
    data.created_by = _actor(account)
    return await service.update_template(template_id, data)


@router.delete("/{template_id}", response_model=DeleteResponse, summary="Delete a template and its history")
async def delete_template(
    template_id: str,
    _: Account = Depends(require_permission("templates:delete")),
    service: TemplateService = Depends(get_template_service),
) -> DeleteResponse:
    await service.delete_template(template_id)
    return DeleteResponse()


@router.post("/{template_id}/duplicate", response_model=TemplateResponse, summary="Copy a template")
async def duplicate_template(
    template_id: str,
    account: Account = Depends(require_permission("templates:write")),
    service: TemplateService = Depends(get_template_service),
):
    return await service.duplicate_template(template_id, created_by=_actor(account))


@router.get(
    "/{template_id}/versions",
    response_model=list[TemplateVersionResponse],
    summary="Version history, newest first",
)
async def list_versions(
    template_id: str,
    _: Account = Depends(require_permission("templates:read")),
    service: TemplateService = Depends(get_template_service),
):
    if await service.get_template(template_id) is None:
        raise TemplateNotFoundError("Template not found")
    return await service.list_versions(template_id)


@router.post(
    "/{template_id}/versions/{version_number}/restore",
    response_model=TemplateResponse,
    summary="Restore a historical version as a new version",
)
async def restore_version(
    template_id: str,
    version_number: int,
    account: Account = Depends(require_permission("templates:write")),
    service: TemplateService = Depends(get_template_service),
):
    return await service.restore_template_version(template_id, version_number, created_by=_actor(account))

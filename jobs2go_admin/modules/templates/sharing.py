"""Export and import of cleanup templates as versioned JSON documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

from jobs2go_admin.modules.notifications import OperationEvent

from .exceptions import TemplateError, TemplateNotFoundError
from .models import CleanupTemplate, TemplateCreateInput
from .service import TemplateService

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = "1.0.0"


class TemplateExportEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: Optional[str] = None
    frequency: Literal["DAILY", "WEEKLY", "MONTHLY"]
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    retention_days: int = Field(ge=1)
    min_deployments_to_keep: int = Field(ge=1)
    dry_run: bool
    storage_provider: str
    notify_on_success: bool
    notify_on_failure: bool
    notification_recipients: list[str] = Field(default_factory=list)
    tags: list[str]
    metadata: Optional[dict[str, Any]] = None


class TemplateExportDocument(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: str
    templates: list[TemplateExportEntry]
    metadata: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class ImportResult:
    success: bool = False
    imported: int = 0
    failed: int = 0
    new_template_ids: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class TemplateSharingService:
    def __init__(self, templates: TemplateService, *, source: str, environment: str) -> None:
        self.templates = templates
        self.source = source
        self.environment = environment

    async def export_template(self, template_id: str) -> dict[str, Any]:
        template = await self.templates.get_template(template_id)
        if template is None:
            raise TemplateNotFoundError("Template not found")
        return self._document([template])

    async def export_templates(self, template_ids: list[str]) -> dict[str, Any]:
        templates = []
        for template_id in template_ids:
            template = await self.templates.get_template(template_id)
            if template is not None:
                templates.append(template)
        document = self._document(templates)
        document["metadata"]["count"] = len(templates)
        return document

    async def import_templates(self, data: Any, created_by: Optional[str] = None) -> ImportResult:
        result = ImportResult()
        try:
            document = TemplateExportDocument.model_validate(data)
        except ValidationError as exc:
            logger.warning("Rejected template import: %s", exc.error_count())
            result.errors.append("Invalid template format")
            return result

        for entry in document.templates:
            values = entry.model_dump(exclude={"metadata"})
            try:
                template = await self.templates.create_template(
                    TemplateCreateInput(**values, created_by=created_by)
                )
            except (TemplateError, SQLAlchemyError) as exc:
                result.failed += 1
                result.errors.append(f'Failed to import template "{entry.name}": {exc}')
                continue
            result.imported += 1
            result.new_template_ids.append(template.id)

        result.success = result.imported > 0
        metadata = document.metadata or {}
        await self.templates.notifier.notify(
            OperationEvent(
                type="templates_imported",
                status="success" if result.success else "failure",
                message=f"Imported {result.imported} template(s), {result.failed} failed",
                details={
                    "imported": result.imported,
                    "failed": result.failed,
                    "source": metadata.get("source", "unknown"),
                    "sourceEnvironment": metadata.get("environment", "unknown"),
                },
            )
        )
        return result

    def _document(self, templates: list[CleanupTemplate]) -> dict[str, Any]:
        return {
            "version": EXPORT_FORMAT_VERSION,
            "templates": [self._export_entry(template) for template in templates],
            "metadata": {
                "exportedAt": datetime.now(timezone.utc).isoformat(),
                "source": self.source,
                "environment": self.environment,
            },
        }

    @staticmethod
    def _export_entry(template: CleanupTemplate) -> dict[str, Any]:
        entry = TemplateExportEntry.model_validate(template.snapshot())
        return entry.model_dump(by_alias=True, exclude={"metadata"})

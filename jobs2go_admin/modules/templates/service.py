"""Application service handling cleanup template workflows.

Every create, update and restore appends an immutable ``TemplateVersion`` and
repoints ``current_version_id``; history is never rewritten. Writes for one
operation happen inside ``repository.atomic()`` and the notification is only
sent once that block has committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.modules.notifications import Notifier, OperationEvent

from .exceptions import BuiltInTemplateError, TemplateNotFoundError, TemplateVersionNotFoundError
from .models import CleanupTemplate, TemplateCreateInput, TemplateUpdateInput, TemplateVersion
from .repository import TemplateRepository

logger = logging.getLogger(__name__)

INITIAL_VERSION_DESCRIPTION = "Initial version"
DEFAULT_UPDATE_DESCRIPTION = "Updated template"


@dataclass(slots=True)
class TemplateService:
    repository: TemplateRepository
    notifier: Notifier

    @classmethod
    def with_session(cls, session: AsyncSession, notifier: Notifier) -> "TemplateService":
        from jobs2go_admin.infrastructure.database.repositories.template_repository import SqlTemplateRepository

        return cls(SqlTemplateRepository(session), notifier)

    async def list_templates(self, include_built_in: bool = True) -> list[CleanupTemplate]:
        return list(await self.repository.list_templates(include_built_in=include_built_in))

    async def get_template(self, template_id: str, include_versions: bool = False) -> CleanupTemplate | None:
        return await self.repository.get_by_id(template_id, include_versions=include_versions)

    async def get_templates_by_tags(self, tags: Iterable[str]) -> list[CleanupTemplate]:
        wanted = set(tags)
        templates = await self.repository.list_templates()
        return [template for template in templates if wanted.intersection(template.tags)]

    async def search_templates(self, query: str) -> list[CleanupTemplate]:
        needle = query.lower()
        templates = await self.repository.list_templates()
        return [
            template
            for template in templates
            if needle in template.name.lower()
            or needle in (template.description or "").lower()
            or query in template.tags
        ]

    async def create_template(self, data: TemplateCreateInput) -> CleanupTemplate:
        template, version = await self._create(data.snapshot(), created_by=data.created_by, is_built_in=False)
        await self.notifier.notify(
            OperationEvent(
                type="template_created",
                status="success",
                message=f"Template '{template.name}' was created",
                details={
                    "templateId": template.id,
                    "templateName": template.name,
                    "versionId": version.id,
                    "versionNumber": version.version_number,
                },
            )
        )
        return template

    async def create_built_in_template(self, data: TemplateCreateInput) -> CleanupTemplate:
        """Seed a system template; not exposed through the HTTP surface."""
        template, _ = await self._create(data.snapshot(), created_by=data.created_by, is_built_in=True)
        return template

    async def update_template(self, template_id: str, data: TemplateUpdateInput) -> CleanupTemplate:
        existing = await self.repository.get_by_id(template_id)
        if existing is None or existing.is_built_in:
            raise BuiltInTemplateError("Cannot update built-in template")

        change_description = data.change_description or DEFAULT_UPDATE_DESCRIPTION
        values = data.merged_with(existing.snapshot())
        async with self.repository.atomic():
            version_number = await self.repository.latest_version_number(template_id) + 1
            version = await self.repository.add_version(
                template_id,
                version_number=version_number,
                values=values,
                change_description=change_description,
                created_by=data.created_by,
            )
            template = await self.repository.update_template(
                template_id,
                values=values,
                current_version_id=version.id,
            )

        await self.notifier.notify(
            OperationEvent(
                type="template_updated",
                status="success",
                message=f"Template '{template.name}' was updated to version {version_number}",
                details={
                    "templateId": template.id,
                    "templateName": template.name,
                    "versionId": version.id,
                    "versionNumber": version_number,
                    "changeDescription": change_description,
                },
            )
        )
        return template

    async def delete_template(self, template_id: str) -> CleanupTemplate:
        existing = await self.repository.get_by_id(template_id)
        if existing is None or existing.is_built_in:
            raise BuiltInTemplateError("Cannot delete built-in template")

        async with self.repository.atomic():
            await self.repository.delete_template(template_id)

        await self.notifier.notify(
            OperationEvent(
                type="template_deleted",
                status="success",
                message=f"Template '{existing.name}' was deleted",
                details={"templateId": existing.id, "templateName": existing.name},
            )
        )
        return existing

    async def duplicate_template(self, template_id: str, created_by: Optional[str] = None) -> CleanupTemplate:
        existing = await self.repository.get_by_id(template_id)
        if existing is None:
            raise TemplateNotFoundError("Template not found")

        values = existing.snapshot()
        values["name"] = f"Copy of {existing.name}"
        copy = await self.create_template(TemplateCreateInput(**values, created_by=created_by))

        await self.notifier.notify(
            OperationEvent(
                type="template_duplicated",
                status="success",
                message=f"Template '{existing.name}' was duplicated",
                details={
                    "sourceTemplateId": existing.id,
                    "sourceTemplateName": existing.name,
                    "newTemplateId": copy.id,
                    "newTemplateName": copy.name,
                },
            )
        )
        return copy

    async def list_versions(self, template_id: str) -> list[TemplateVersion]:
        return list(await self.repository.list_versions(template_id))

    async def get_version(self, template_id: str, version_number: int) -> TemplateVersion | None:
        return await self.repository.get_version(template_id, version_number)

    async def restore_template_version(
        self,
        template_id: str,
        version_number: int,
        created_by: Optional[str] = None,
    ) -> CleanupTemplate:
        target = await self.repository.get_version(template_id, version_number)
        if target is None:
            raise TemplateVersionNotFoundError("Version not found")

        existing = await self.repository.get_by_id(template_id)
        if existing is None:
            raise TemplateNotFoundError("Template not found")
        if existing.is_built_in:
            raise BuiltInTemplateError("Cannot restore version for built-in template")

        values = target.snapshot()
        async with self.repository.atomic():
            new_number = await self.repository.latest_version_number(template_id) + 1
            version = await self.repository.add_version(
                template_id,
                version_number=new_number,
                values=values,
                change_description=f"Restored from version {version_number}",
                created_by=created_by,
            )
            template = await self.repository.update_template(
                template_id,
                values=values,
                current_version_id=version.id,
            )

        await self.notifier.notify(
            OperationEvent(
                type="template_version_restored",
                status="success",
                message=f"Template '{template.name}' was restored from version {version_number}",
                details={
                    "templateId": template_id,
                    "templateName": template.name,
                    "restoredFromVersion": version_number,
                    "newVersionId": version.id,
                    "newVersionNumber": new_number,
                },
            )
        )
        return template

    async def _create(
        self,
        values: dict[str, Any],
        *,
        created_by: Optional[str],
        is_built_in: bool,
    ) -> tuple[CleanupTemplate, TemplateVersion]:
        async with self.repository.atomic():
            template = await self.repository.create_template(
                values=values,
                is_built_in=is_built_in,
                created_by=created_by,
            )
            version = await self.repository.add_version(
                template.id,
                version_number=1,
                values=values,
                change_description=INITIAL_VERSION_DESCRIPTION,
                created_by=created_by,
            )
            template = await self.repository.update_template(
                template.id,
                values=values,
                current_version_id=version.id,
            )
        logger.info("Created %stemplate %s (%s)", "built-in " if is_built_in else "", template.id, template.name)
        return template, version

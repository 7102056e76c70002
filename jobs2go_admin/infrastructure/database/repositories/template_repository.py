"""SQLAlchemy implementation for cleanup template repository."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.db.models import CleanupTemplate as CleanupTemplateModel
from jobs2go_admin.db.models import TemplateVersion as TemplateVersionModel
from jobs2go_admin.modules.templates.exceptions import (
    TemplateNotFoundError,
    TemplateVersionConflictError,
)
from jobs2go_admin.modules.templates.models import VERSIONED_FIELDS, CleanupTemplate, TemplateVersion


class SqlTemplateRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        try:
            yield
            await self.session.flush()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.commit()

    async def list_templates(self, *, include_built_in: bool = True) -> Sequence[CleanupTemplate]:
        stmt = select(CleanupTemplateModel).order_by(
            CleanupTemplateModel.is_built_in.desc(),
            CleanupTemplateModel.created_at.desc(),
        )
        if not include_built_in:
            stmt = stmt.where(CleanupTemplateModel.is_built_in.is_(False))
        result = await self.session.execute(stmt)
        models = result.scalars().all()
        versions = await self._versions_by_id(
            [model.current_version_id for model in models if model.current_version_id]
        )
        return [
            self._to_domain(model, current=versions.get(model.current_version_id))
            for model in models
        ]

    async def get_by_id(self, template_id: str, *, include_versions: bool = False) -> CleanupTemplate | None:
        model = await self._get_model(template_id)
        if model is None:
            return None
        template = self._to_domain(model)
        if include_versions:
            template.versions = list(await self.list_versions(template_id))
            template.current_version = next(
                (version for version in template.versions if version.id == model.current_version_id),
                None,
            )
        elif model.current_version_id:
            versions = await self._versions_by_id([model.current_version_id])
            template.current_version = versions.get(model.current_version_id)
        return template

    async def count_built_in(self) -> int:
        stmt = select(func.count()).select_from(CleanupTemplateModel).where(
            CleanupTemplateModel.is_built_in.is_(True)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def create_template(
        self,
        *,
        values: dict[str, Any],
        is_built_in: bool,
        created_by: str | None,
    ) -> CleanupTemplate:
        model = CleanupTemplateModel(
            **self._column_values(values),
            is_built_in=is_built_in,
            created_by=created_by,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def update_template(
        self,
        template_id: str,
        *,
        values: dict[str, Any],
        current_version_id: str,
    ) -> CleanupTemplate:
        stmt = (
            update(CleanupTemplateModel)
            .where(CleanupTemplateModel.id == template_id)
            .values(**self._column_values(values), current_version_id=current_version_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise TemplateNotFoundError(template_id)
        model = await self._get_model(template_id)
        assert model is not None
        await self.session.refresh(model)
        versions = await self._versions_by_id([current_version_id])
        return self._to_domain(model, current=versions.get(current_version_id))

    async def delete_template(self, template_id: str) -> None:
        await self.session.execute(
            delete(TemplateVersionModel).where(TemplateVersionModel.template_id == template_id)
        )
        await self.session.execute(
            delete(CleanupTemplateModel).where(CleanupTemplateModel.id == template_id)
        )

    async def latest_version_number(self, template_id: str) -> int:
        stmt = select(func.max(TemplateVersionModel.version_number)).where(
            TemplateVersionModel.template_id == template_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def add_version(
        self,
        template_id: str,
        *,
        version_number: int,
        values: dict[str, Any],
        change_description: str,
        created_by: str | None,
    ) -> TemplateVersion:
        model = TemplateVersionModel(
            template_id=template_id,
            version_number=version_number,
            **self._column_values(values),
            change_description=change_description,
            created_by=created_by,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise TemplateVersionConflictError(
                f"Version {version_number} of template {template_id} already exists"
            ) from exc
        await self.session.refresh(model)
        return self._version_to_domain(model)

    async def list_versions(self, template_id: str) -> Sequence[TemplateVersion]:
        stmt = (
            select(TemplateVersionModel)
            .where(TemplateVersionModel.template_id == template_id)
            .order_by(TemplateVersionModel.version_number.desc())
        )
        result = await self.session.execute(stmt)
        return [self._version_to_domain(model) for model in result.scalars().all()]

    async def get_version(self, template_id: str, version_number: int) -> TemplateVersion | None:
        stmt = select(TemplateVersionModel).where(
            TemplateVersionModel.template_id == template_id,
            TemplateVersionModel.version_number == version_number,
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._version_to_domain(model) if model else None

    async def _get_model(self, template_id: str) -> CleanupTemplateModel | None:
        stmt = select(CleanupTemplateModel).where(CleanupTemplateModel.id == template_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def _versions_by_id(self, version_ids: list[str]) -> dict[str, TemplateVersion]:
        if not version_ids:
            return {}
        stmt = select(TemplateVersionModel).where(TemplateVersionModel.id.in_(version_ids))
        result = await self.session.execute(stmt)
        return {model.id: self._version_to_domain(model) for model in result.scalars().all()}

    @staticmethod
    def _column_values(values: dict[str, Any]) -> dict[str, Any]:
        column_values = {name: values[name] for name in VERSIONED_FIELDS}
        column_values["notification_recipients"] = list(column_values["notification_recipients"] or [])
        column_values["tags"] = list(column_values["tags"] or [])
        return column_values

    @staticmethod
    def _to_domain(model: CleanupTemplateModel, current: TemplateVersion | None = None) -> CleanupTemplate:
        return CleanupTemplate(
            id=model.id,
            name=model.name,
            description=model.description,
            frequency=model.frequency,
            day_of_week=model.day_of_week,
            day_of_month=model.day_of_month,
            hour=model.hour,
            minute=model.minute,
            retention_days=model.retention_days,
            min_deployments_to_keep=model.min_deployments_to_keep,
            dry_run=bool(model.dry_run),
            storage_provider=model.storage_provider,
            notify_on_success=bool(model.notify_on_success),
            notify_on_failure=bool(model.notify_on_failure),
            notification_recipients=list(model.notification_recipients or []),
            tags=list(model.tags or []),
            is_built_in=bool(model.is_built_in),
            current_version_id=model.current_version_id,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
            current_version=current,
        )

    @staticmethod
    def _version_to_domain(model: TemplateVersionModel) -> TemplateVersion:
        return TemplateVersion(
            id=model.id,
            template_id=model.template_id,
            version_number=model.version_number,
            name=model.name,
            description=model.description,
            frequency=model.frequency,
            day_of_week=model.day_of_week,
            day_of_month=model.day_of_month,
            hour=model.hour,
            minute=model.minute,
            retention_days=model.retention_days,
            min_deployments_to_keep=model.min_deployments_to_keep,
            dry_run=bool(model.dry_run),
            storage_provider=model.storage_provider,
            notify_on_success=bool(model.notify_on_success),
            notify_on_failure=bool(model.notify_on_failure),
            notification_recipients=list(model.notification_recipients or []),
            tags=list(model.tags or []),
            change_description=model.change_description,
            created_by=model.created_by,
            created_at=model.created_at,
        )

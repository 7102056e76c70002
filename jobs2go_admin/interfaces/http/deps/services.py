"""Template and schedule service providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.core.container import ApplicationContainer
from jobs2go_admin.modules.schedules import ScheduleService
from jobs2go_admin.modules.templates import TemplateService, TemplateSharingService

from .container import get_container
from .database import get_db_session


def get_template_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> TemplateService:
    return TemplateService.with_session(db, container.notifier)


def get_sharing_service(
    templates: TemplateService = Depends(get_template_service),
    container: ApplicationContainer = Depends(get_container),
) -> TemplateSharingService:
    settings = container.settings
    return TemplateSharingService(
        templates,
        source=settings.monitoring.app_url,
        environment=settings.environment,
    )


def get_schedule_service(db: AsyncSession = Depends(get_db_session)) -> ScheduleService:
    return ScheduleService.with_session(db)


__all__ = ["get_schedule_service", "get_sharing_service", "get_template_service"]

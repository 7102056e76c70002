import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobs2go_admin import __version__
from jobs2go_admin.core.config import Settings, get_settings
from jobs2go_admin.core.container import build_container
from jobs2go_admin.core.logging import configure_logging
from jobs2go_admin.infrastructure.database import dispose_engine, init_db, session_scope
from jobs2go_admin.interfaces.http.errors import register_exception_handlers
from jobs2go_admin.interfaces.http.routers import create_api_router
from jobs2go_admin.modules.templates import TemplateService
from jobs2go_admin.modules.templates.builtins import seed_built_in_templates

logger = logging.getLogger(__name__)


async def seed_templates(container) -> int:
    async with session_scope() as session:
        return await seed_built_in_templates(TemplateService.with_session(session, container.notifier))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        container = build_container(settings)
        app.state.container = container
        await init_db()
        if settings.seed_builtin_templates:
            seeded = await seed_templates(container)
            if seeded:
                logger.info("Seeded %d built-in cleanup templates", seeded)
        await container.monitoring.start()
        try:
            yield
        finally:
            await container.monitoring.shutdown()
            await dispose_engine()

    app = FastAPI(
        title=settings.project_name,
        description="Admin console backend: cleanup templates, schedules, notifications and health checks",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))
    return app


app = create_app()

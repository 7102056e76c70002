from fastapi import APIRouter

from . import accounts, auth, email_test, health, schedules, templates


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(
        schedules.router,
        prefix="/admin/source-maps/cleanup-schedules",
        tags=["cleanup schedules"],
    )
    router.include_router(templates.router, prefix="/admin/source-maps/templates", tags=["cleanup templates"])
    router.include_router(accounts.router, prefix="/admin/accounts", tags=["accounts"])
    router.include_router(email_test.router, prefix="/test", tags=["diagnostics"])
    router.include_router(health.router, tags=["health"])
    return router


__all__ = [
    "create_api_router",
]

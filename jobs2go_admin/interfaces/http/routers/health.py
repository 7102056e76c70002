"""Liveness, readiness and deployment verification checks (no authentication)."""
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from jobs2go_admin import __version__
from jobs2go_admin.core.config import validate_environment
from jobs2go_admin.infrastructure.database.session import get_engine
from jobs2go_admin.interfaces.http.errors import error_boundary
from jobs2go_admin.modules.monitoring.health import check_database, memory_usage_mb, uptime_seconds
from jobs2go_admin.modules.templates import TemplateService

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unhealthy(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "unhealthy", "timestamp": _now(), "error": str(exc)},
    )


@router.get("/health", summary="Liveness check")
async def health() -> dict[str, Any]:
    return {"status": "ok", "timestamp": _now()}


@router.get("/monitoring/health", summary="Database, memory and uptime report")
@error_boundary(_unhealthy)
async def monitoring_health(request: Request) -> dict[str, Any]:
    settings = request.app.state.container.settings
    return {
        "status": "ok",
        "timestamp": _now(),
        "version": settings.monitoring.app_version or __version__,
        "environment": settings.environment,
        "database": await check_database(get_engine()),
        "memory": memory_usage_mb(),
        "uptime": round(uptime_seconds()),
    }


@router.get("/health/complete", summary="Configuration and service report for deployment checks")
@error_boundary(_unhealthy)
async def complete_health(request: Request) -> JSONResponse:
    started = time.perf_counter()
    settings = request.app.state.container.settings
    report = validate_environment()
    email = settings.email
    monitoring = settings.monitoring

    body = {
        "status": "healthy",
        "timestamp": _now(),
        "environment": settings.environment,
        "version": monitoring.app_version or __version__,
        "deployment": {
            "url": monitoring.app_url,
            "region": monitoring.region or "unknown",
            "commit": (monitoring.commit_sha or "unknown")[:7],
        },
        "services": {
            "database": "configured" if settings.database_url else "not_configured",
            "email": {
                "provider": email.provider,
                "resend": bool(email.resend_api_key),
                "smtp": bool(email.smtp_host and email.smtp_user),
                "alertRecipients": bool(email.alert_recipients),
            },
            "monitoring": {
                "sentry": bool(monitoring.sentry_dsn),
                "analytics": bool(monitoring.analytics_id),
                "slack": bool(settings.slack.webhook_url),
            },
            "security": {
                "secretKey": bool(settings.secret_key),
                "cronSecret": bool(monitoring.cron_secret),
                "appUrl": bool(monitoring.app_url),
            },
        },
        "environmentValidation": {
            "success": report.success,
            "errors": report.errors,
            "warnings": report.warnings,
        },
        "uptime": uptime_seconds(),
        "memory": memory_usage_mb(),
    }
    body["responseTime"] = f"{round((time.perf_counter() - started) * 1000)}ms"
    return JSONResponse(content=body, headers=NO_CACHE_HEADERS)


@router.get("/health/deployment", summary="Check that core collaborators are wired")
@error_boundary(_unhealthy)
async def deployment_health(request: Request) -> JSONResponse:
    container = getattr(request.app.state, "container", None)
    checks = {
        "database": get_engine() is not None,
        "permissionCache": container is not None and container.permission_cache is not None,
        "notifier": container is not None and callable(getattr(container.notifier, "notify", None)),
        "monitoring": container is not None and container.monitoring.running,
        "templateService": callable(getattr(TemplateService, "with_session", None)),
    }
    missing = [name for name, available in checks.items() if not available]
    if missing:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": "Missing collaborators detected", "missing": missing},
        )
    return JSONResponse(
        content={
            "status": "ok",
            "message": "All required collaborators are available",
            "timestamp": _now(),
            "environment": container.settings.environment,
        }
    )

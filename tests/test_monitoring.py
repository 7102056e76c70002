import asyncio
from types import SimpleNamespace

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from jobs2go_admin.core.config import Settings
from jobs2go_admin.interfaces.http.errors import error_boundary
from jobs2go_admin.modules.monitoring import MonitoringEvent, MonitoringService, format_event_details
from jobs2go_admin.modules.monitoring.health import memory_usage_mb

pytestmark = pytest.mark.unit


class RecordingSlack:
    webhook_url = "https://hooks.slack.test/T000"

    def __init__(self) -> None:
        self.alerts: list[tuple[str, str, str]] = []

    async def send_alert(self, title: str, message: str, severity: str = "info") -> bool:
        self.alerts.append((title, message, severity))
        return True


class RecordingEmail:
    def __init__(self) -> None:
        self.alerts: list[tuple[list[str], str]] = []

    async def send_alert(self, to, title: str, message: str, severity: str = "info") -> bool:
        self.alerts.append((list(to), title))
        return True


def _settings(**overrides) -> Settings:
    return Settings(**overrides)


def test_track_event_buffers_without_alerting_on_info() -> None:
    slack = RecordingSlack()
    service = MonitoringService(_settings(), slack=slack)

    service.track_event(MonitoringEvent(category="api", severity="info", message="ping"))

    assert [event.message for event in service.buffered_events] == ["ping"]
    assert slack.alerts == []


async def test_error_event_fans_out_to_slack_and_email() -> None:
    slack = RecordingSlack()
    email = RecordingEmail()
    settings = _settings(email={"alert_recipients": ["oncall@example.com"]})
    service = MonitoringService(settings, slack=slack, email=email)

    service.track_event(
        MonitoringEvent(category="database", severity="critical", message="pool exhausted", source="worker")
    )
    await service.shutdown()

    [(title, body, severity)] = slack.alerts
    assert title == "[CRITICAL] database: pool exhausted"
    assert "*Source:* worker" in body
    assert severity == "error"
    assert email.alerts == [(["oncall@example.com"], "[CRITICAL] database: pool exhausted")]


async def test_track_error_records_exception_details() -> None:
    service = MonitoringService(_settings())

    service.track_error("API route error", ValueError("bad input"), {"url": "/x"})
    await service.shutdown()

    assert service.flushed_count == 1


def test_track_error_payload() -> None:
    service = MonitoringService(_settings())

    service.track_error("Import failed", KeyError("name"))

    [event] = service.buffered_events
    assert event.severity == "error"
    assert event.details == {"errorType": "KeyError", "errorMessage": "'name'"}


async def test_flush_empties_buffer() -> None:
    service = MonitoringService(_settings())
    service.track_event(MonitoringEvent(category="user", severity="info", message="login"))
    service.track_event(MonitoringEvent(category="user", severity="warning", message="slow login"))

    assert await service.flush() == 2
    assert service.buffered_events == []
    assert await service.flush() == 0


async def test_failed_flush_keeps_events(monkeypatch: pytest.MonkeyPatch) -> None:
    service = MonitoringService(_settings())
    service.track_event(MonitoringEvent(category="system", severity="info", message="boot"))

    def _broken(events) -> None:
        raise RuntimeError("sink unavailable")

    monkeypatch.setattr(service, "_persist", _broken)

    assert await service.flush() == 0
    assert [event.message for event in service.buffered_events] == ["boot"]


async def test_start_and_shutdown_flush_task() -> None:
    service = MonitoringService(_settings(monitoring={"flush_interval_seconds": 0.01}))
    await service.start()
    assert service.running

    service.track_event(MonitoringEvent(category="system", severity="info", message="tick"))
    await asyncio.sleep(0.05)
    assert service.buffered_events == []

    await service.shutdown()
    assert not service.running


def test_format_event_details_includes_environment() -> None:
    event = MonitoringEvent(
        category="security",
        severity="error",
        message="too many logins",
        details={"ip": "10.0.0.1"},
        user_id="u-1",
    )

    body = format_event_details(event, "production")

    assert body.startswith("*too many logins*")
    assert '• ip: "10.0.0.1"' in body
    assert "*User ID:* u-1" in body
    assert body.endswith("*Environment:* production")


def test_error_boundary_returns_fallback_and_tracks() -> None:
    monitoring = MonitoringService(_settings())
    app = FastAPI()
    app.state.container = SimpleNamespace(monitoring=monitoring, settings=_settings())

    def _fallback(exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=503, content={"status": "degraded", "error": str(exc)})

    @app.get("/boom")
    @error_boundary(_fallback)
    async def boom(request: Request) -> dict:
        raise RuntimeError("handler exploded")

    @app.get("/fine")
    @error_boundary(_fallback)
    async def fine(request: Request) -> dict:
        return {"status": "ok"}

    with TestClient(app) as client:
        assert client.get("/fine").json() == {"status": "ok"}
        response = client.get("/boom")

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "error": "handler exploded"}
    [event] = monitoring.buffered_events
    assert event.message == "API route error"
    assert event.details["method"] == "GET"
    assert event.details["errorMessage"] == "handler exploded"


def test_memory_usage_reports_current_process_figures() -> None:
    memory = memory_usage_mb()

    assert set(memory) == {"rss", "vms"}
    assert 0 < memory["rss"] <= memory["vms"]

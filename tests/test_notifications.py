from __future__ import annotations

import json
import smtplib
from datetime import datetime, timezone

import httpx
import pytest

from jobs2go_admin.core.config import EmailSettings
from jobs2go_admin.modules.notifications import (
    EmailMessage,
    EmailService,
    OperationEvent,
    SlackWebhookClient,
    SourceMapNotifier,
    format_notification,
)

pytestmark = pytest.mark.unit

FIXED_TIME = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


class RecordingTransport(httpx.AsyncBaseTransport):
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"id": "msg_1"})

    def payloads(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


class ExplodingSlack:
    webhook_url = "https://hooks.slack.test/boom"

    async def send_message(self, *args, **kwargs) -> bool:
        raise RuntimeError("slack is down")


class RecordingEmail:
    def __init__(self) -> None:
        self.messages: list[EmailMessage] = []

    async def send_email(self, message: EmailMessage) -> bool:
        self.messages.append(message)
        return True


def _event(**overrides) -> OperationEvent:
    values = {
        "type": "template_created",
        "status": "success",
        "message": "Template 'Nightly' was created",
        "timestamp": FIXED_TIME,
    }
    values.update(overrides)
    return OperationEvent(**values)


def test_format_notification_builds_title_and_body() -> None:
    title, body = format_notification(
        _event(details={"templateId": "abc", "version": 2}, operation_id="op-7")
    )

    assert title == "Source Map Template Created Success"
    assert body.startswith("*Source Map Template Created Success*\n\nTemplate 'Nightly' was created")
    assert '• templateId: "abc"' in body
    assert "• version: 2" in body
    assert "*Operation ID:* op-7" in body
    assert body.endswith(f"*Time:* {FIXED_TIME.isoformat()}")


def test_format_notification_without_details() -> None:
    _, body = format_notification(_event())

    assert "*Details:*" not in body
    assert "Operation ID" not in body


async def test_slack_client_posts_webhook_payload() -> None:
    transport = RecordingTransport()
    client = SlackWebhookClient(
        "https://hooks.slack.test/T000",
        default_channel="#alerts",
        transport=transport,
    )

    assert await client.send_message("hello", attachments=[{"text": "body"}]) is True

    [payload] = transport.payloads()
    assert payload["text"] == "hello"
    assert payload["channel"] == "#alerts"
    assert payload["username"] == "Jobs2Go Bot"
    assert payload["attachments"] == [{"text": "body"}]


async def test_slack_client_reports_rejected_message() -> None:
    client = SlackWebhookClient("https://hooks.slack.test/T000", transport=RecordingTransport(500))

    assert await client.send_alert("Disk", "almost full", "warning") is False


async def test_email_service_uses_resend_when_configured() -> None:
    transport = RecordingTransport()
    service = EmailService(
        EmailSettings(provider="resend", resend_api_key="re_test"),
        transport=transport,
    )

    sent = await service.send_email(EmailMessage(to=["ops@example.com"], subject="Hi", text="plain"))

    assert sent is True
    [request] = transport.requests
    assert request.url.path == "/emails"
    assert request.headers["Authorization"] == "Bearer re_test"
    payload = transport.payloads()[0]
    assert payload["to"] == ["ops@example.com"]
    assert payload["from"] == "Jobs2Go <onboarding@resend.dev>"
    assert "html" not in payload


async def test_email_service_without_any_provider_returns_false() -> None:
    service = EmailService(EmailSettings(provider="resend", resend_api_key=None))

    assert await service.send_email(EmailMessage(to=["ops@example.com"], subject="Hi")) is False


async def test_email_alert_prefixes_subject_with_severity() -> None:
    transport = RecordingTransport()
    service = EmailService(EmailSettings(resend_api_key="re_test"), transport=transport)

    assert await service.send_alert("ops@example.com", "Cleanup failed", "details here", "error") is True

    payload = transport.payloads()[0]
    assert payload["subject"] == "[ERROR] Cleanup failed"
    assert "<h2>[ERROR] Cleanup failed</h2>" in payload["html"]


async def test_notifier_keeps_email_when_slack_fails() -> None:
    email = RecordingEmail()
    notifier = SourceMapNotifier(
        slack=ExplodingSlack(),
        email=email,
        sender="maps@example.com",
        admin_email="admin@example.com",
    )

    await notifier.notify(_event(status="failure", message="Import failed"))

    [message] = email.messages
    assert message.to == ["admin@example.com"]
    assert message.subject == "[FAILURE] Source Map Template Created Failure"
    assert message.from_address == "maps@example.com"
    assert "*" not in message.text
    assert "<strong>Source Map Template Created Failure</strong>" in message.html


async def test_notifier_skips_email_without_admin_address() -> None:
    email = RecordingEmail()
    notifier = SourceMapNotifier(slack=None, email=email, sender="maps@example.com", admin_email=None)

    await notifier.notify(_event())

    assert email.messages == []


async def test_notifier_posts_colored_slack_attachment() -> None:
    transport = RecordingTransport()
    slack = SlackWebhookClient("https://hooks.slack.test/T000", transport=transport)
    notifier = SourceMapNotifier(slack=slack, email=None, sender=None, admin_email=None)

    await notifier.notify(_event(status="warning"))

    [payload] = transport.payloads()
    attachment = payload["attachments"][0]
    assert attachment["color"] == "#f2c744"
    assert attachment["footer"] == "Source Map Management System"


def _smtp_settings(**overrides) -> EmailSettings:
    values = {
        "provider": "resend",
        "resend_api_key": "re_test",
        "smtp_host": "smtp.example.com",
        "smtp_user": "mailer",
        "smtp_password": "secret",
    }
    values.update(overrides)
    return EmailSettings(**values)


async def test_email_falls_back_to_smtp_when_resend_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    resend_calls: list[httpx.Request] = []

    def _reject(request: httpx.Request) -> httpx.Response:
        resend_calls.append(request)
        return httpx.Response(500, json={"message": "internal error"})

    service = EmailService(_smtp_settings(), transport=httpx.MockTransport(_reject))
    smtp_messages: list[EmailMessage] = []
    monkeypatch.setattr(service, "_smtp_send", smtp_messages.append)

    sent = await service.send_email(EmailMessage(to=["ops@example.com"], subject="Fallback", text="body"))

    assert sent is True
    assert len(resend_calls) == 1
    assert [message.subject for message in smtp_messages] == ["Fallback"]


async def test_email_reports_failure_when_smtp_also_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    service = EmailService(
        _smtp_settings(),
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )

    def _refuse(message: EmailMessage) -> None:
        raise smtplib.SMTPServerDisconnected("connection closed")

    monkeypatch.setattr(service, "_smtp_send", _refuse)

    assert await service.send_email(EmailMessage(to=["ops@example.com"], subject="Lost")) is False


async def test_smtp_provider_skips_resend(monkeypatch: pytest.MonkeyPatch) -> None:
    transport = RecordingTransport()
    service = EmailService(_smtp_settings(provider="smtp"), transport=transport)
    smtp_messages: list[EmailMessage] = []
    monkeypatch.setattr(service, "_smtp_send", smtp_messages.append)

    assert await service.send_email(EmailMessage(to=["ops@example.com"], subject="Direct")) is True
    assert transport.requests == []
    assert len(smtp_messages) == 1

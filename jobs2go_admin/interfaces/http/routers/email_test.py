"""Endpoints for verifying outbound email configuration after a deployment."""
from datetime import datetime, timezone
from html import escape
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from jobs2go_admin.core.config import Settings
from jobs2go_admin.interfaces.http.deps import get_email_service, get_settings_dep
from jobs2go_admin.modules.notifications import EmailMessage, EmailService
from jobs2go_admin.schemas import TestEmailRequest

router = APIRouter()

FALLBACK_TEST_ADDRESS = "test@example.com"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/email", summary="Send a test email and a test alert")
async def send_test_email(
    email: Optional[str] = Query(None),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_settings_dep),
) -> dict[str, Any]:
    recipient = email or next(iter(settings.email.alert_recipients), FALLBACK_TEST_ADDRESS)
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h2>Email Configuration Test</h2>"
        "<p>This email confirms that your Jobs2Go platform email configuration is working correctly.</p>"
        "<ul>"
        f"<li><strong>Timestamp:</strong> {_now()}</li>"
        f"<li><strong>Provider:</strong> {escape(email_service.provider)}</li>"
        f"<li><strong>Environment:</strong> {escape(settings.environment)}</li>"
        "</ul>"
        "</div>"
    )
    email_sent = await email_service.send_email(
        EmailMessage(
            to=[recipient],
            subject="Jobs2Go Email Test - Deployment Verification",
            text="This is a test email to verify the email configuration is working correctly after deployment.",
            html=html,
        )
    )
    alert_sent = await email_service.send_alert(
        recipient,
        "Email Configuration Test",
        "This is a test alert to verify alert email functionality is working correctly.",
        "info",
    )
    return {
        "success": True,
        "message": "Email test completed",
        "results": {
            "recipient": recipient,
            "emailSent": email_sent,
            "alertSent": alert_sent,
            "provider": email_service.provider,
            "timestamp": _now(),
        },
    }


@router.post("/email", summary="Send a custom email or alert")
async def send_custom_email(
    payload: TestEmailRequest,
    email_service: EmailService = Depends(get_email_service),
):
    if not payload.to or not payload.subject or not payload.message:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Missing required fields: to, subject, message"},
        )

    if payload.type == "alert":
        sent = await email_service.send_alert(payload.to, payload.subject, payload.message, "info")
    else:
        sent = await email_service.send_email(
            EmailMessage(
                to=[payload.to],
                subject=payload.subject,
                text=payload.message,
                html=f'<div style="font-family: Arial, sans-serif;"><p>{escape(payload.message)}</p></div>',
            )
        )
    return {
        "success": sent,
        "message": "Email sent successfully" if sent else "Email sending failed",
        "provider": email_service.provider,
        "timestamp": _now(),
    }

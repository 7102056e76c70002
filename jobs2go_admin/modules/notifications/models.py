"""Domain models for outbound notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

OperationStatus = Literal["success", "failure", "warning"]
AlertSeverity = Literal["info", "warning", "error"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class OperationEvent:
    type: str
    status: OperationStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)
    operation_id: Optional[str] = None


@dataclass(slots=True)
class EmailMessage:
    to: list[str]
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None
    from_address: Optional[str] = None
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)

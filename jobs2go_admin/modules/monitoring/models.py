"""Monitoring event types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

MonitoringSeverity = Literal["debug", "info", "warning", "error", "critical"]
MonitoringCategory = Literal["error", "performance", "security", "database", "api", "user", "system"]

ALERT_SEVERITIES = frozenset({"error", "critical"})


@dataclass(slots=True)
class MonitoringEvent:
    category: MonitoringCategory
    severity: MonitoringSeverity
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    source: Optional[str] = None
    user_id: Optional[str] = None
    request_id: Optional[str] = None

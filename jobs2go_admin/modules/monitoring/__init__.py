"""Monitoring events, alerting and health checks."""

from .models import MonitoringEvent
from .service import MonitoringService, format_event_details

__all__ = ["MonitoringEvent", "MonitoringService", "format_event_details"]

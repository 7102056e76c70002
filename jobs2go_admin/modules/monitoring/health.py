"""Process and database health checks."""

from __future__ import annotations

import time
from typing import Any

import psutil
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

_STARTED_AT = time.monotonic()

_MB = 1024 * 1024


def uptime_seconds() -> float:
    return time.monotonic() - _STARTED_AT


def memory_usage_mb() -> dict[str, float]:
    """Current resident and virtual memory of this process, in MB."""
    info = psutil.Process().memory_info()
    return {
        "rss": round(info.rss / _MB, 1),
        "vms": round(info.vms / _MB, 1),
    }


async def check_database(engine: AsyncEngine) -> dict[str, Any]:
    started = time.perf_counter()
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        return {"status": "error", "latency": 0, "error": type(exc).__name__}
    return {"status": "connected", "latency": round((time.perf_counter() - started) * 1000)}

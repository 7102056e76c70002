"""Logging configuration for the admin console."""

from __future__ import annotations

import logging
import sys

from jobs2go_admin.core.config import Settings

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
KEYVALUE_FORMAT = 'ts=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'


def configure_logging(settings: Settings) -> None:
    """Install a stdout handler on the root logger according to settings."""
    fmt = KEYVALUE_FORMAT if settings.logging.format == "keyvalue" else TEXT_FORMAT
    level = logging.DEBUG if settings.debug else getattr(logging, settings.logging.level)
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # SQL echo is controlled by database.echo, keep the engine logger quiet otherwise
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

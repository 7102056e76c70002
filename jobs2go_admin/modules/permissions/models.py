"""Permission names recognised by the admin console."""

from __future__ import annotations

from typing import Literal

Permission = Literal[
    "admin:access",
    "templates:read",
    "templates:write",
    "templates:delete",
    "source_maps:read",
    "source_maps:write",
    "source_maps:delete",
    "audit:read",
    "users:read",
    "users:write",
    "roles:read",
    "roles:write",
]

ALL_PERMISSIONS: tuple[str, ...] = (
    "admin:access",
    "templates:read",
    "templates:write",
    "templates:delete",
    "source_maps:read",
    "source_maps:write",
    "source_maps:delete",
    "audit:read",
    "users:read",
    "users:write",
    "roles:read",
    "roles:write",
)

# Roles created by init_admin.py; administrators can define more.
DEFAULT_ROLES: dict[str, tuple[str, ...]] = {
    "admin": ALL_PERMISSIONS,
    "editor": (
        "admin:access",
        "templates:read",
        "templates:write",
        "source_maps:read",
        "source_maps:write",
    ),
    "viewer": ("admin:access", "templates:read", "source_maps:read"),
}

"""Permission resolution and caching."""

from .cache import DEFAULT_TTL_SECONDS, InMemoryPermissionCache, PermissionCache
from .models import ALL_PERMISSIONS, DEFAULT_ROLES, Permission
from .service import PermissionLoader, PermissionService

__all__ = [
    "ALL_PERMISSIONS",
    "DEFAULT_ROLES",
    "DEFAULT_TTL_SECONDS",
    "InMemoryPermissionCache",
    "Permission",
    "PermissionCache",
    "PermissionLoader",
    "PermissionService",
]

"""Permission checks backed by a TTL cache.

Every check fails closed: a missing session, an unknown account or an error
while loading roles all answer ``False``.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, Optional

from jobs2go_admin.modules.accounts.models import Account

from .cache import PermissionCache

logger = logging.getLogger(__name__)

PermissionLoader = Callable[[str], Awaitable[Optional[Iterable[str]]]]


class PermissionService:
    def __init__(self, cache: PermissionCache, loader: PermissionLoader) -> None:
        self._cache = cache
        self._loader = loader

    async def has_permission(
        self,
        permission: str,
        user_id: Optional[str] = None,
        *,
        session: Optional[Account] = None,
    ) -> bool:
        if user_id is None and session is not None:
            user_id = session.id
        if not user_id:
            return False

        try:
            permissions = await self._resolve(user_id)
        except Exception:
            logger.exception("Permission check for %s on %s failed", permission, user_id)
            return False
        if permissions is None:
            return False
        return permission in permissions

    async def get_user_permissions(self, user_id: str) -> list[str]:
        try:
            permissions = await self._resolve(user_id)
        except Exception:
            logger.exception("Loading permissions for %s failed", user_id)
            return []
        return sorted(permissions or ())

    def clear_permission_cache(self, user_id: str) -> None:
        self._cache.invalidate(user_id)
        logger.debug("Cleared cached permissions for %s", user_id)

    async def _resolve(self, user_id: str) -> frozenset[str] | None:
        cached = self._cache.get(user_id)
        if cached is not None:
            return cached

        loaded = await self._loader(user_id)
        if loaded is None:
            return None
        permissions = frozenset(loaded)
        self._cache.set(user_id, permissions)
        return permissions

from __future__ import annotations

import pytest

from jobs2go_admin.modules.accounts import Account, AccountCreateInput, AccountService
from jobs2go_admin.modules.permissions import DEFAULT_ROLES, InMemoryPermissionCache, PermissionService

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingLoader:
    def __init__(self, grants: dict[str, set[str]]) -> None:
        self.grants = grants
        self.calls: list[str] = []

    async def __call__(self, user_id: str) -> set[str] | None:
        self.calls.append(user_id)
        return self.grants.get(user_id)


async def _failing_loader(user_id: str) -> set[str] | None:
    raise RuntimeError("database unavailable")


def _account(account_id: str) -> Account:
    return Account(id=account_id, username=account_id, is_active=True, password_hash="x")


def test_cache_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = InMemoryPermissionCache(ttl_seconds=300, clock=clock)
    cache.set("u1", frozenset({"templates:read"}))

    clock.now += 299
    assert cache.get("u1") == frozenset({"templates:read"})
    clock.now += 1
    assert cache.get("u1") is None
    assert len(cache) == 0


def test_cache_invalidate_and_clear() -> None:
    cache = InMemoryPermissionCache()
    cache.set("u1", frozenset({"a"}))
    cache.set("u2", frozenset({"b"}))

    cache.invalidate("u1")
    cache.invalidate("unknown")
    assert cache.get("u1") is None
    assert cache.get("u2") == frozenset({"b"})

    cache.clear()
    assert cache.get("u2") is None


async def test_cache_hit_skips_loader_until_expiry() -> None:
    clock = FakeClock()
    loader = CountingLoader({"u1": {"templates:read"}})
    service = PermissionService(InMemoryPermissionCache(clock=clock), loader)

    assert await service.has_permission("templates:read", "u1") is True
    assert await service.has_permission("templates:write", "u1") is False
    assert loader.calls == ["u1"]

    clock.now += 301
    assert await service.has_permission("templates:read", "u1") is True
    assert loader.calls == ["u1", "u1"]


async def test_clear_permission_cache_forces_reload() -> None:
    loader = CountingLoader({"u1": {"templates:read"}})
    service = PermissionService(InMemoryPermissionCache(), loader)
    await service.has_permission("templates:read", "u1")

    loader.grants["u1"] = {"templates:read", "templates:delete"}
    assert await service.has_permission("templates:delete", "u1") is False

    service.clear_permission_cache("u1")
    assert await service.has_permission("templates:delete", "u1") is True
    assert loader.calls == ["u1", "u1"]


async def test_checks_fail_closed() -> None:
    loader = CountingLoader({})
    service = PermissionService(InMemoryPermissionCache(), loader)

    assert await service.has_permission("templates:read") is False
    assert await service.has_permission("templates:read", "ghost") is False
    assert loader.calls == ["ghost"]

    broken = PermissionService(InMemoryPermissionCache(), _failing_loader)
    assert await broken.has_permission("templates:read", "u1") is False
    assert await broken.get_user_permissions("u1") == []


async def test_session_resolves_user() -> None:
    loader = CountingLoader({"u1": {"audit:read"}})
    service = PermissionService(InMemoryPermissionCache(), loader)

    assert await service.has_permission("audit:read", session=_account("u1")) is True
    assert await service.get_user_permissions("u1") == ["audit:read"]


async def test_role_assignment_flows_through_database(session) -> None:
    cache = InMemoryPermissionCache()
    accounts = AccountService.with_session(session)
    for name, permissions in DEFAULT_ROLES.items():
        await accounts.ensure_role(name, permissions)
    viewer = await accounts.create_account(
        AccountCreateInput(username="viewer", password="password1", roles=["viewer"])
    )
    permissions = PermissionService(cache, accounts.load_permissions)
    accounts = AccountService.with_session(session, permissions)

    assert await permissions.has_permission("templates:read", viewer.id) is True
    assert await permissions.has_permission("templates:write", viewer.id) is False

    updated = await accounts.assign_roles(viewer.id, ["editor"])

    assert updated.roles == ["editor"]
    assert cache.get(viewer.id) is None
    assert await permissions.has_permission("templates:write", viewer.id) is True

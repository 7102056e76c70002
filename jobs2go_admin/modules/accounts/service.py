"""Domain services for account management."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.core.crypto import hash_password, verify_password

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, AccountCreateInput, Role
from .repository import AccountRepository

if TYPE_CHECKING:
    from jobs2go_admin.modules.permissions import PermissionService


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, permissions: Optional["PermissionService"] = None) -> None:
        self._repository = repository
        self._permissions = permissions

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        permissions: Optional["PermissionService"] = None,
    ) -> "AccountService":
        from jobs2go_admin.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session), permissions)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_username(self, username: str) -> Account | None:
        return await self._repository.get_by_username(username)

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._repository.get_by_username(username)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        existing = await self._repository.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Username already exists: {payload.username}")

        account = await self._repository.create_account(
            username=payload.username,
            password_hash=hash_password(payload.password),
            email=payload.email,
            is_active=payload.is_active,
        )
        if payload.roles:
            account = await self._repository.replace_roles(account.id, payload.roles)
        return account

    async def ensure_role(self, name: str, permissions: Iterable[str], description: str | None = None) -> Role:
        return await self._repository.ensure_role(name, permissions, description)

    async def assign_roles(self, account_id: str, role_names: Sequence[str]) -> Account:
        """Replace the account's roles and drop its cached permissions."""
        if await self._repository.get_by_id(account_id) is None:
            raise AccountNotFoundError(account_id)
        account = await self._repository.replace_roles(account_id, list(dict.fromkeys(role_names)))
        if self._permissions is not None:
            self._permissions.clear_permission_cache(account_id)
        return account

    async def load_permissions(self, account_id: str) -> set[str] | None:
        return await self._repository.load_permissions(account_id)

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

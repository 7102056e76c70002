"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.db.models import Account as AccountModel
from jobs2go_admin.db.models import AccountRole, Permission, RolePermission
from jobs2go_admin.db.models import Role as RoleModel
from jobs2go_admin.modules.accounts.exceptions import AccountNotFoundError, RoleNotFoundError
from jobs2go_admin.modules.accounts.models import Account, Role
from jobs2go_admin.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        model = await self._session.get(AccountModel, account_id)
        if model is None:
            return None
        return self._to_domain(model, await self._role_names(model.id))

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model, await self._role_names(model.id))

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        email: str | None,
        is_active: bool,
    ) -> Account:
        model = AccountModel(
            username=username,
            password_hash=password_hash,
            email=email,
            is_active=is_active,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model, [])

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(last_login_at=timestamp)
        )
        await self._session.execute(stmt)

    async def get_role(self, name: str) -> Role | None:
        result = await self._session.execute(select(RoleModel).where(RoleModel.name == name))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Role(
            id=model.id,
            name=model.name,
            description=model.description,
            permissions=await self._role_permissions(model.id),
        )

    async def ensure_role(self, name: str, permissions: Iterable[str], description: str | None = None) -> Role:
        result = await self._session.execute(select(RoleModel).where(RoleModel.name == name))
        role = result.scalar_one_or_none()
        if role is None:
            role = RoleModel(name=name, description=description)
            self._session.add(role)
            await self._session.flush()

        granted = set(await self._role_permissions(role.id))
        for permission_name in permissions:
            if permission_name in granted:
                continue
            permission = await self._get_or_create_permission(permission_name)
            self._session.add(RolePermission(role_id=role.id, permission_id=permission.id))
            granted.add(permission_name)
        await self._session.flush()
        return Role(id=role.id, name=role.name, description=role.description, permissions=sorted(granted))

    async def replace_roles(self, account_id: str, role_names: Sequence[str]) -> Account:
        model = await self._session.get(AccountModel, account_id)
        if model is None:
            raise AccountNotFoundError(account_id)

        role_ids: list[str] = []
        for name in role_names:
            result = await self._session.execute(select(RoleModel.id).where(RoleModel.name == name))
            role_id = result.scalar_one_or_none()
            if role_id is None:
                raise RoleNotFoundError(name)
            role_ids.append(role_id)

        current = await self._session.execute(select(AccountRole).where(AccountRole.account_id == account_id))
        for link in current.scalars().all():
            await self._session.delete(link)
        await self._session.flush()
        for role_id in role_ids:
            self._session.add(AccountRole(account_id=account_id, role_id=role_id))
        await self._session.flush()
        return self._to_domain(model, await self._role_names(account_id))

    async def load_permissions(self, account_id: str) -> set[str] | None:
        exists = await self._session.execute(select(AccountModel.id).where(AccountModel.id == account_id))
        if exists.scalar_one_or_none() is None:
            return None

        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(AccountRole, AccountRole.role_id == RolePermission.role_id)
            .where(AccountRole.account_id == account_id)
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def _role_names(self, account_id: str) -> list[str]:
        stmt = (
            select(RoleModel.name)
            .join(AccountRole, AccountRole.role_id == RoleModel.id)
            .where(AccountRole.account_id == account_id)
            .order_by(RoleModel.name)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def _role_permissions(self, role_id: str) -> list[str]:
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.name)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def _get_or_create_permission(self, name: str) -> Permission:
        result = await self._session.execute(select(Permission).where(Permission.name == name))
        permission = result.scalar_one_or_none()
        if permission is None:
            permission = Permission(name=name)
            self._session.add(permission)
            await self._session.flush()
        return permission

    @staticmethod
    def _to_domain(model: AccountModel, roles: list[str]) -> Account:
        return Account(
            id=str(model.id),
            username=model.username,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            email=model.email,
            roles=roles,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )

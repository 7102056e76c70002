"""Repository protocol for accounts and their roles."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol, Sequence

from .models import Account, Role


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        email: str | None,
        is_active: bool,
    ) -> Account:
        ...

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        ...

    async def get_role(self, name: str) -> Role | None:
        ...

    async def ensure_role(self, name: str, permissions: Iterable[str], description: str | None = None) -> Role:
        ...

    async def replace_roles(self, account_id: str, role_names: Sequence[str]) -> Account:
        ...

    async def load_permissions(self, account_id: str) -> set[str] | None:
        """Flattened permission names across the account's roles, ``None`` for an unknown account."""
        ...

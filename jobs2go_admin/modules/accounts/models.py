"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Account:
    id: str
    username: str
    is_active: bool
    password_hash: str = field(repr=False)
    email: Optional[str] = None
    roles: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


@dataclass(slots=True)
class Role:
    id: str
    name: str
    description: Optional[str] = None
    permissions: list[str] = field(default_factory=list)


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
    email: Optional[str] = None
    is_active: bool = True
    roles: list[str] = field(default_factory=list)

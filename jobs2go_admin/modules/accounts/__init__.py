"""Accounts, roles and authentication."""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError, RoleNotFoundError
from .models import Account, AccountCreateInput, Role
from .service import AccountService

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountService",
    "Role",
    "RoleNotFoundError",
]

"""JWT helpers and FastAPI dependencies resolving the acting account."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from jobs2go_admin.core.config import Settings
from jobs2go_admin.interfaces.http.deps import get_account_service, get_permission_service, get_settings_dep
from jobs2go_admin.modules.accounts import Account, AccountService
from jobs2go_admin.modules.permissions import PermissionService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    account_id: str
    username: str


def create_access_token(
    settings: Settings,
    account_id: str,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: Settings, token: str) -> TokenData | None:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    account_id = payload.get("sub")
    username = payload.get("username")
    if not account_id or not username:
        return None
    return TokenData(account_id=account_id, username=username)


async def get_optional_account(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings_dep),
    account_service: AccountService = Depends(get_account_service),
) -> Account | None:
    """Bearer header first, then the session cookie; ``None`` when neither yields an active account."""
    token = credentials.credentials if credentials else request.cookies.get(settings.security.session_cookie_name)
    if not token:
        return None
    token_data = decode_access_token(settings, token)
    if token_data is None:
        return None
    account = await account_service.get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        return None
    return account


async def get_current_account(account: Optional[Account] = Depends(get_optional_account)) -> Account:
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return account


def require_permission(permission: str) -> Callable[..., Awaitable[Account]]:
    """Dependency factory: 401 without an account, 403 without ``permission``."""

    async def dependency(
        account: Account = Depends(get_current_account),
        permissions: PermissionService = Depends(get_permission_service),
    ) -> Account:
        if not await permissions.has_permission(permission, session=account):
            logger.info("Account %s denied %s", account.id, permission)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return account

    return dependency


__all__ = [
    "TokenData",
    "create_access_token",
    "decode_access_token",
    "get_current_account",
    "get_optional_account",
    "require_permission",
]

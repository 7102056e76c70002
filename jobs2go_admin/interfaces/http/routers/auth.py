"""Authentication endpoints for the admin console."""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from jobs2go_admin.core.config import Settings
from jobs2go_admin.core.security import create_access_token, get_current_account
from jobs2go_admin.interfaces.http.deps import get_account_service, get_permission_service, get_settings_dep
from jobs2go_admin.modules.accounts import Account, AccountService
from jobs2go_admin.modules.permissions import PermissionService
from jobs2go_admin.schemas import AccountResponse, CurrentAccountResponse, LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse, summary="Sign in with username and password")
async def login(
    payload: LoginRequest,
    response: Response,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings_dep),
) -> LoginResponse:
    account = await account_service.authenticate(payload.username, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    await account_service.set_last_login(account.id)

    access_token = create_access_token(settings, account.id, account.username)
    response.set_cookie(
        settings.security.session_cookie_name,
        access_token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    return LoginResponse(access_token=access_token, account=AccountResponse.model_validate(account))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Clear the session cookie")
async def logout(response: Response, settings: Settings = Depends(get_settings_dep)) -> Response:
    response.status_code = status.HTTP_204_NO_CONTENT
    response.delete_cookie(settings.security.session_cookie_name)
    return response


@router.get("/me", response_model=CurrentAccountResponse, summary="Current account and its permissions")
async def me(
    account: Account = Depends(get_current_account),
    permissions: PermissionService = Depends(get_permission_service),
) -> CurrentAccountResponse:
    granted = await permissions.get_user_permissions(account.id)
    return CurrentAccountResponse.model_validate(account).model_copy(update={"permissions": granted})

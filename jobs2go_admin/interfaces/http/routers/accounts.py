"""Role assignment and permission inspection for accounts."""
from fastapi import APIRouter, Depends

from jobs2go_admin.core.security import require_permission
from jobs2go_admin.interfaces.http.deps import get_account_service, get_permission_service
from jobs2go_admin.modules.accounts import Account, AccountService
from jobs2go_admin.modules.permissions import PermissionService
from jobs2go_admin.schemas import AccountPermissionsResponse, AccountResponse, RoleAssignmentRequest

router = APIRouter()


@router.put("/{account_id}/roles", response_model=AccountResponse, summary="Replace an account's roles")
async def assign_roles(
    account_id: str,
    payload: RoleAssignmentRequest,
    _: Account = Depends(require_permission("roles:write")),
    account_service: AccountService = Depends(get_account_service),
):
    return await account_service.assign_roles(account_id, payload.roles)


@router.get(
    "/{account_id}/permissions",
    response_model=AccountPermissionsResponse,
    summary="Effective permissions of an account",
)
async def account_permissions(
    account_id: str,
    _: Account = Depends(require_permission("users:read")),
    permissions: PermissionService = Depends(get_permission_service),
) -> AccountPermissionsResponse:
    return AccountPermissionsResponse(
        account_id=account_id,
        permissions=await permissions.get_user_permissions(account_id),
    )

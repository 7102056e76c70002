"""Account and permission dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.core.container import ApplicationContainer
from jobs2go_admin.infrastructure.database.repositories.account_repository import SqlAccountRepository
from jobs2go_admin.modules.accounts.service import AccountService
from jobs2go_admin.modules.permissions import PermissionService

from .container import get_container
from .database import get_db_session


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_permission_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    container: ApplicationContainer = Depends(get_container),
) -> PermissionService:
    # process-wide cache, loader bound to this request's session
    return PermissionService(container.permission_cache, repository.load_permissions)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    permissions: PermissionService = Depends(get_permission_service),
) -> AccountService:
    return AccountService(repository, permissions)


__all__ = [
    "get_account_repository",
    "get_account_service",
    "get_permission_service",
]

"""
Initialise roles and the first administrator account.

Creates the default roles with their permissions, then an ``admin`` account
holding the ``admin`` role if it does not exist yet.
"""
import argparse
import asyncio
import os

from jobs2go_admin.infrastructure.database import init_db, session_scope
from jobs2go_admin.modules.accounts import AccountCreateInput, AccountService
from jobs2go_admin.modules.permissions import DEFAULT_ROLES


async def create_default_admin(username: str, password: str, email: str) -> bool:
    """Create default roles and the admin account; returns False when the account already exists."""
    await init_db()

    async with session_scope() as db:
        service = AccountService.with_session(db)
        for name, permissions in DEFAULT_ROLES.items():
            await service.ensure_role(name, permissions, description=f"Default {name} role")

        if await service.get_by_username(username) is not None:
            print(f"Account '{username}' already exists, nothing to do")
            return False

        await service.create_account(
            AccountCreateInput(
                username=username,
                password=password,
                email=email,
                roles=["admin"],
            )
        )

    print("=" * 50)
    print("Default administrator created")
    print("=" * 50)
    print(f"Username: {username}")
    print(f"Password: {password}")
    print("=" * 50)
    print("Change the password after the first login!")
    print("=" * 50)
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Create default roles and the first admin account")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD", "admin123"))
    parser.add_argument("--email", default="admin@example.com")
    args = parser.parse_args()
    asyncio.run(create_default_admin(args.username, args.password, args.email))


if __name__ == "__main__":
    main()

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.core.config import get_settings
from jobs2go_admin.infrastructure.database import dispose_engine, get_session_factory, init_db, session_scope
from jobs2go_admin.modules.accounts import AccountCreateInput, AccountService
from jobs2go_admin.modules.notifications import OperationEvent
from jobs2go_admin.modules.permissions import DEFAULT_ROLES
from jobs2go_admin.modules.templates import TemplateCreateInput, TemplateService

TEST_PASSWORD = "s3cret-pass"


class RecordingNotifier:
    def __init__(self) -> None:
        self.events: list[OperationEvent] = []

    async def notify(self, event: OperationEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [event.type for event in self.events]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SLACK__WEBHOOK_URL", "")
    monkeypatch.setenv("EMAIL__RESEND_API_KEY", "")
    monkeypatch.setenv("EMAIL__ADMIN_EMAIL", "")
    monkeypatch.setenv("EMAIL__SMTP_HOST", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def session() -> AsyncIterator[AsyncSession]:
    await init_db()
    async with get_session_factory()() as db:
        yield db
    await dispose_engine()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def template_service(session: AsyncSession, notifier: RecordingNotifier) -> TemplateService:
    return TemplateService.with_session(session, notifier)


def _template_input(**overrides) -> TemplateCreateInput:
    values = {
        "name": "Nightly Cleanup",
        "description": "Removes stale source maps",
        "frequency": "DAILY",
        "hour": 2,
        "minute": 30,
        "retention_days": 30,
        "min_deployments_to_keep": 5,
        "tags": ["nightly"],
        "created_by": "tester@example.com",
    }
    values.update(overrides)
    return TemplateCreateInput(**values)


@pytest.fixture
def template_input() -> Callable[..., TemplateCreateInput]:
    return _template_input


@pytest.fixture
def client() -> Iterator[TestClient]:
    from jobs2go_admin.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


async def _create_account(username: str, roles: list[str]) -> str:
    async with session_scope() as db:
        service = AccountService.with_session(db)
        for name, permissions in DEFAULT_ROLES.items():
            await service.ensure_role(name, permissions)
        account = await service.create_account(
            AccountCreateInput(
                username=username,
                password=TEST_PASSWORD,
                email=f"{username}@example.com",
                roles=roles,
            )
        )
    return account.id


@pytest.fixture
def login_as(client: TestClient) -> Callable[..., dict[str, str]]:
    """Create an account with ``roles`` and return bearer headers for it."""

    def _login(username: str = "admin", roles: tuple[str, ...] = ("admin",)) -> dict[str, str]:
        client.portal.call(_create_account, username, list(roles))
        response = client.post("/api/auth/login", json={"username": username, "password": TEST_PASSWORD})
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _login

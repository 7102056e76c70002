"""Repository protocol for cleanup template persistence."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, Sequence

from .models import CleanupTemplate, TemplateVersion


class TemplateRepository(Protocol):
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Commit the writes made inside the block together, or roll all of them back."""
        ...

    async def list_templates(self, *, include_built_in: bool = True) -> Sequence[CleanupTemplate]:
        ...

    async def get_by_id(self, template_id: str, *, include_versions: bool = False) -> CleanupTemplate | None:
        ...

    async def count_built_in(self) -> int:
        ...

    async def create_template(
        self,
        *,
        values: dict[str, Any],
        is_built_in: bool,
        created_by: str | None,
    ) -> CleanupTemplate:
        ...

    async def update_template(
        self,
        template_id: str,
        *,
        values: dict[str, Any],
        current_version_id: str,
    ) -> CleanupTemplate:
        ...

    async def delete_template(self, template_id: str) -> None:
        ...

    async def latest_version_number(self, template_id: str) -> int:
        ...

    async def add_version(
        self,
        template_id: str,
        *,
        version_number: int,
        values: dict[str, Any],
        change_description: str,
        created_by: str | None,
    ) -> TemplateVersion:
        ...

    async def list_versions(self, template_id: str) -> Sequence[TemplateVersion]:
        ...

    async def get_version(self, template_id: str, version_number: int) -> TemplateVersion | None:
        ...

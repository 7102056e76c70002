from __future__ import annotations

import pytest

from jobs2go_admin.modules.templates import TemplateNotFoundError, TemplateSharingService

pytestmark = pytest.mark.unit


@pytest.fixture
def sharing(template_service) -> TemplateSharingService:
    return TemplateSharingService(template_service, source="https://admin.jobs2go.test", environment="test")


async def test_export_drops_identity_and_uses_camel_case(sharing, template_service, template_input) -> None:
    template = await template_service.create_template(template_input(frequency="WEEKLY", day_of_week=1))

    document = await sharing.export_template(template.id)

    assert document["version"] == "1.0.0"
    assert document["metadata"]["source"] == "https://admin.jobs2go.test"
    assert document["metadata"]["environment"] == "test"
    assert "exportedAt" in document["metadata"]
    (entry,) = document["templates"]
    assert entry["name"] == "Nightly Cleanup"
    assert entry["dayOfWeek"] == 1
    assert entry["minDeploymentsToKeep"] == 5
    for dropped in ("id", "isBuiltIn", "createdAt", "updatedAt", "createdBy", "currentVersionId"):
        assert dropped not in entry


async def test_export_missing_template(sharing) -> None:
    with pytest.raises(TemplateNotFoundError):
        await sharing.export_template("missing")


async def test_bulk_export_skips_missing_ids(sharing, template_service, template_input) -> None:
    first = await template_service.create_template(template_input(name="First"))
    second = await template_service.create_template(template_input(name="Second"))

    document = await sharing.export_templates([first.id, "missing", second.id])

    assert [entry["name"] for entry in document["templates"]] == ["First", "Second"]
    assert document["metadata"]["count"] == 2


async def test_import_round_trip_creates_custom_templates(sharing, template_service, template_input, notifier) -> None:
    built_in = await template_service.create_built_in_template(template_input(name="System default"))
    document = await sharing.export_template(built_in.id)

    result = await sharing.import_templates(document, created_by="importer@example.com")

    assert result.success is True
    assert result.imported == 1
    assert result.failed == 0
    (new_id,) = result.new_template_ids
    imported = await template_service.get_template(new_id, include_versions=True)
    assert imported.name == "System default"
    assert imported.is_built_in is False
    assert imported.created_by == "importer@example.com"
    assert [version.version_number for version in imported.versions] == [1]
    assert notifier.types[-1] == "templates_imported"
    assert notifier.events[-1].details["sourceEnvironment"] == "test"


async def test_import_rejects_malformed_document(sharing, notifier) -> None:
    result = await sharing.import_templates({"version": "1.0.0", "templates": [{"name": "broken", "hour": 99}]})

    assert result.success is False
    assert result.imported == 0
    assert result.errors == ["Invalid template format"]
    assert notifier.events == []

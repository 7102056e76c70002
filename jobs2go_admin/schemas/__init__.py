"""Pydantic schemas used across the HTTP surface.

JSON bodies use camelCase; snake_case names are accepted on input as well.
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Frequency = Literal["DAILY", "WEEKLY", "MONTHLY"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -- auth / accounts -------------------------------------------------------


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class AccountResponse(CamelModel):
    id: str
    username: str
    email: Optional[str] = None
    is_active: bool
    roles: list[str] = Field(default_factory=list)
    last_login_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountResponse


class CurrentAccountResponse(AccountResponse):
    permissions: list[str] = Field(default_factory=list)


class RoleAssignmentRequest(CamelModel):
    roles: list[str]


class AccountPermissionsResponse(CamelModel):
    account_id: str
    permissions: list[str]


# -- templates -------------------------------------------------------------


class TemplateFields(CamelModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    frequency: Frequency
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    retention_days: int = Field(..., ge=1)
    min_deployments_to_keep: int = Field(..., ge=1)
    dry_run: bool = False
    storage_provider: str = "s3"
    notify_on_success: bool = False
    notify_on_failure: bool = True
    notification_recipients: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class TemplateCreateRequest(TemplateFields):
    pass


_REQUIRED_TEMPLATE_COLUMNS = (
    "name",
    "frequency",
    "hour",
    "minute",
    "retention_days",
    "min_deployments_to_keep",
    "dry_run",
    "storage_provider",
    "notify_on_success",
    "notify_on_failure",
    "notification_recipients",
    "tags",
)


class TemplateUpdateRequest(CamelModel):
    """Partial update; an explicit ``null`` clears nullable fields such as ``dayOfWeek``."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    frequency: Optional[Frequency] = None
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    hour: Optional[int] = Field(default=None, ge=0, le=23)
    minute: Optional[int] = Field(default=None, ge=0, le=59)
    retention_days: Optional[int] = Field(default=None, ge=1)
    min_deployments_to_keep: Optional[int] = Field(default=None, ge=1)
    dry_run: Optional[bool] = None
    storage_provider: Optional[str] = None
    notify_on_success: Optional[bool] = None
    notify_on_failure: Optional[bool] = None
    notification_recipients: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    change_description: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def reject_null_required(self) -> "TemplateUpdateRequest":
        for name in _REQUIRED_TEMPLATE_COLUMNS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class TemplateVersionResponse(TemplateFields):
    id: str
    template_id: str
    version_number: int
    change_description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class TemplateResponse(TemplateFields):
    id: str
    is_built_in: bool
    current_version_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    current_version: Optional[TemplateVersionResponse] = None


class TemplateDetailResponse(TemplateResponse):
    versions: list[TemplateVersionResponse] = Field(default_factory=list)


class TemplateExportRequest(CamelModel):
    template_ids: list[str] = Field(..., min_length=1)


class ImportResultResponse(CamelModel):
    success: bool
    imported: int
    failed: int
    new_template_ids: list[str]
    errors: list[str]


class DeleteResponse(CamelModel):
    success: bool = True


# -- schedules -------------------------------------------------------------


def _check_cron(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.split()) != 5:
        raise ValueError("Please provide a valid cron schedule.")
    return value


class ScheduleCreateRequest(CamelModel):
    name: str = Field(..., min_length=3, max_length=150)
    description: Optional[str] = None
    retention_days: int = Field(..., ge=1)
    min_versions_to_keep: int = Field(..., ge=1)
    cron_schedule: str = Field(..., min_length=9, max_length=100)
    dry_run: bool = False
    delete_from_storage: bool = True
    delete_from_database: bool = True
    notify_on_completion: bool = True
    notification_channels: list[str] = Field(default_factory=list)
    template_id: Optional[str] = None
    is_active: bool = True

    @field_validator("cron_schedule")
    @classmethod
    def cron_has_five_fields(cls, value: Optional[str]) -> Optional[str]:
        return _check_cron(value)


class ScheduleUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=150)
    description: Optional[str] = None
    retention_days: Optional[int] = Field(default=None, ge=1)
    min_versions_to_keep: Optional[int] = Field(default=None, ge=1)
    cron_schedule: Optional[str] = Field(default=None, min_length=9, max_length=100)
    dry_run: Optional[bool] = None
    delete_from_storage: Optional[bool] = None
    delete_from_database: Optional[bool] = None
    notify_on_completion: Optional[bool] = None
    notification_channels: Optional[list[str]] = None
    template_id: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("cron_schedule")
    @classmethod
    def cron_has_five_fields(cls, value: Optional[str]) -> Optional[str]:
        return _check_cron(value)

    def provided_values(self) -> dict[str, Any]:
        # only template_id may be cleared with an explicit null
        values = self.model_dump(exclude_unset=True)
        return {key: value for key, value in values.items() if value is not None or key == "template_id"}


class ScheduleFromTemplateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=150)
    cron_schedule: Optional[str] = Field(default=None, min_length=9, max_length=100)
    dry_run: Optional[bool] = None
    is_active: Optional[bool] = None
    notification_channels: Optional[list[str]] = None

    @field_validator("cron_schedule")
    @classmethod
    def cron_has_five_fields(cls, value: Optional[str]) -> Optional[str]:
        return _check_cron(value)


class ScheduleResponse(CamelModel):
    id: str
    name: str
    description: str
    retention_days: int
    min_versions_to_keep: int
    cron_schedule: str
    dry_run: bool
    delete_from_storage: bool
    delete_from_database: bool
    notify_on_completion: bool
    notification_channels: list[str]
    template_id: Optional[str] = None
    is_active: bool
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -- email test ------------------------------------------------------------


class TestEmailRequest(CamelModel):
    __test__ = False

    to: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    type: Literal["email", "alert"] = "email"

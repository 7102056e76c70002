"""Application configuration using pydantic settings with structured sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./jobs2go_admin.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12
    session_cookie_name: str = "jobs2go_session"


class EmailSettings(BaseModel):
    provider: Literal["resend", "smtp"] = "resend"
    from_address: str = "onboarding@resend.dev"
    from_name: str = "Jobs2Go"
    reply_to: str = "help@jobs2go.app"
    admin_email: Optional[str] = None
    alert_recipients: list[str] = Field(default_factory=list)
    resend_api_key: Optional[str] = None
    resend_base_url: str = "https://api.resend.com"
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    timeout_seconds: float = 10.0


class SlackSettings(BaseModel):
    webhook_url: Optional[str] = None
    default_channel: str = "#alerts"
    username: str = "Jobs2Go Bot"
    timeout_seconds: float = 10.0


class PermissionSettings(BaseModel):
    cache_ttl_seconds: float = Field(default=300.0, gt=0)


class MonitoringSettings(BaseModel):
    flush_interval_seconds: float = Field(default=10.0, gt=0)
    app_url: str = "http://jobs2go.app"
    app_version: Optional[str] = None
    region: Optional[str] = None
    commit_sha: Optional[str] = None
    sentry_dsn: Optional[str] = None
    analytics_id: Optional[str] = None
    cron_secret: Optional[str] = None


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["text", "keyvalue"] = "text"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Jobs2Go Admin Console"
    api_prefix: str = "/api"
    seed_builtin_templates: bool = True

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    email: EmailSettings = EmailSettings()
    slack: SlackSettings = SlackSettings()
    permissions: PermissionSettings = PermissionSettings()
    monitoring: MonitoringSettings = MonitoringSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


@dataclass(slots=True)
class EnvironmentReport:
    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_environment() -> EnvironmentReport:
    """Re-read the environment and report problems without raising."""
    try:
        settings = Settings()
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return EnvironmentReport(success=False, errors=errors)

    warnings: list[str] = []
    if settings.environment == "production":
        if settings.security.secret_key == DEFAULT_SECRET_KEY:
            warnings.append("security.secret_key still uses the default value")
        if not settings.slack.webhook_url and not settings.email.admin_email:
            warnings.append("no notification channel is configured")
    if settings.email.provider == "resend" and not settings.email.resend_api_key:
        warnings.append("email.provider is resend but email.resend_api_key is not set")
    return EnvironmentReport(success=True, warnings=warnings)

"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from jobs2go_admin.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


# microsecond timestamps; server_default alone has one-second resolution on SQLite
def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class Permission(Base):
    __tablename__ = "permissions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(255))


class AccountRole(Base):
    __tablename__ = "account_roles"

    account_id = Column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)


class RolePermission(Base):
    __tablename__ = "role_permissions"

    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
    permission_id = Column(String(36), ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True)


class CleanupTemplate(Base):
    __tablename__ = "cleanup_templates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text)
    frequency = Column(String(10), nullable=False)
    day_of_week = Column(Integer)
    day_of_month = Column(Integer)
    hour = Column(Integer, nullable=False)
    minute = Column(Integer, nullable=False)
    retention_days = Column(Integer, nullable=False)
    min_deployments_to_keep = Column(Integer, nullable=False)
    dry_run = Column(Boolean, nullable=False, default=False)
    storage_provider = Column(String(50), nullable=False, default="s3")
    notify_on_success = Column(Boolean, nullable=False, default=False)
    notify_on_failure = Column(Boolean, nullable=False, default=True)
    notification_recipients = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    is_built_in = Column(Boolean, nullable=False, default=False)
    # back-reference only, versions are owned through template_versions.template_id
    current_version_id = Column(String(36))
    created_by = Column(String(100))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class TemplateVersion(Base):
    __tablename__ = "template_versions"
    __table_args__ = (
        UniqueConstraint("template_id", "version_number", name="uq_template_versions_template_number"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    template_id = Column(
        String(36),
        ForeignKey("cleanup_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version_number = Column(Integer, nullable=False)
    name = Column(String(150), nullable=False)
    description = Column(Text)
    frequency = Column(String(10), nullable=False)
    day_of_week = Column(Integer)
    day_of_month = Column(Integer)
    hour = Column(Integer, nullable=False)
    minute = Column(Integer, nullable=False)
    retention_days = Column(Integer, nullable=False)
    min_deployments_to_keep = Column(Integer, nullable=False)
    dry_run = Column(Boolean, nullable=False, default=False)
    storage_provider = Column(String(50), nullable=False, default="s3")
    notify_on_success = Column(Boolean, nullable=False, default=False)
    notify_on_failure = Column(Boolean, nullable=False, default=True)
    notification_recipients = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    change_description = Column(String(255))
    created_by = Column(String(100))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class CleanupSchedule(Base):
    __tablename__ = "cleanup_schedules"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False, default="")
    retention_days = Column(Integer, nullable=False)
    min_versions_to_keep = Column(Integer, nullable=False)
    cron_schedule = Column(String(100), nullable=False)
    dry_run = Column(Boolean, nullable=False, default=False)
    delete_from_storage = Column(Boolean, nullable=False, default=True)
    delete_from_database = Column(Boolean, nullable=False, default=True)
    notify_on_completion = Column(Boolean, nullable=False, default=True)
    notification_channels = Column(JSON, nullable=False, default=list)
    # advisory link to the template the schedule was seeded from, never cascaded
    template_id = Column(String(36), index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_run = Column(DateTime(timezone=True))
    next_run = Column(DateTime(timezone=True))
    created_by = Column(String(100), nullable=False, default="system")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

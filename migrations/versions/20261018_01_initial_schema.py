"""initial admin console schema

Revision ID: 5c2e81f0a9d1
Revises: 
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c2e81f0a9d1"
down_revision = None
branch_labels = None
depends_on = None


def _template_columns() -> list[sa.Column]:
    return [
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("frequency", sa.String(length=10), nullable=False),
        sa.Column("day_of_week", sa.Integer()),
        sa.Column("day_of_month", sa.Integer()),
        sa.Column("hour", sa.Integer(), nullable=False),
        sa.Column("minute", sa.Integer(), nullable=False),
        sa.Column("retention_days", sa.Integer(), nullable=False),
        sa.Column("min_deployments_to_keep", sa.Integer(), nullable=False),
        sa.Column("dry_run", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("storage_provider", sa.String(length=50), nullable=False, server_default="s3"),
        sa.Column("notify_on_success", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notify_on_failure", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("notification_recipients", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "permissions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(length=255)),
    )
    op.create_table(
        "account_roles",
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", sa.String(length=36), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.String(length=36), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "permission_id",
            sa.String(length=36),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "cleanup_templates",
        sa.Column("id", sa.String(length=36), primary_key=True),
        *_template_columns(),
        sa.Column("is_built_in", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("current_version_id", sa.String(length=36)),
        sa.Column("created_by", sa.String(length=100)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_cleanup_templates_name", "cleanup_templates", ["name"])

    op.create_table(
        "template_versions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "template_id",
            sa.String(length=36),
            sa.ForeignKey("cleanup_templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("version_number", sa.Integer(), nullable=False),
        *_template_columns(),
        sa.Column("change_description", sa.String(length=255)),
        sa.Column("created_by", sa.String(length=100)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("template_id", "version_number", name="uq_template_versions_template_number"),
    )
    op.create_index("ix_template_versions_template_id", "template_versions", ["template_id"])

    op.create_table(
        "cleanup_schedules",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("retention_days", sa.Integer(), nullable=False),
        sa.Column("min_versions_to_keep", sa.Integer(), nullable=False),
        sa.Column("cron_schedule", sa.String(length=100), nullable=False),
        sa.Column("dry_run", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("delete_from_storage", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("delete_from_database", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("notify_on_completion", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("notification_channels", sa.JSON(), nullable=False),
        sa.Column("template_id", sa.String(length=36)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_run", sa.DateTime(timezone=True)),
        sa.Column("next_run", sa.DateTime(timezone=True)),
        sa.Column("created_by", sa.String(length=100), nullable=False, server_default="system"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_cleanup_schedules_template_id", "cleanup_schedules", ["template_id"])


def downgrade() -> None:
    op.drop_index("ix_cleanup_schedules_template_id", table_name="cleanup_schedules")
    op.drop_table("cleanup_schedules")
    op.drop_index("ix_template_versions_template_id", table_name="template_versions")
    op.drop_table("template_versions")
    op.drop_index("ix_cleanup_templates_name", table_name="cleanup_templates")
    op.drop_table("cleanup_templates")
    op.drop_table("role_permissions")
    op.drop_table("account_roles")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")

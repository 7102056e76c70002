"""System-provided cleanup templates seeded on first start."""

from __future__ import annotations

import logging

from .models import TemplateCreateInput
from .service import TemplateService

logger = logging.getLogger(__name__)

BUILT_IN_TEMPLATES: tuple[TemplateCreateInput, ...] = (
    TemplateCreateInput(
        name="Daily Maintenance",
        description="Daily cleanup that keeps recent source maps for quick debugging",
        frequency="DAILY",
        hour=1,
        minute=0,
        retention_days=7,
        min_deployments_to_keep=10,
        tags=["daily", "balanced", "recommended"],
        storage_provider="s3",
        created_by="system",
    ),
    TemplateCreateInput(
        name="Weekly Archiving",
        description="Weekly cleanup that balances storage and debugging needs",
        frequency="WEEKLY",
        day_of_week=0,
        hour=2,
        minute=0,
        retention_days=30,
        min_deployments_to_keep=5,
        tags=["weekly", "balanced"],
        storage_provider="s3",
        created_by="system",
    ),
    TemplateCreateInput(
        name="Monthly Purging",
        description="Monthly aggressive cleanup to free up storage space",
        frequency="MONTHLY",
        day_of_month=1,
        hour=1,
        minute=0,
        retention_days=90,
        min_deployments_to_keep=3,
        tags=["monthly", "aggressive"],
        storage_provider="s3",
        created_by="system",
    ),
    TemplateCreateInput(
        name="Development Environment",
        description="Aggressive daily cleanup for development environments",
        frequency="DAILY",
        hour=0,
        minute=0,
        retention_days=3,
        min_deployments_to_keep=3,
        tags=["daily", "aggressive", "development"],
        storage_provider="s3",
        created_by="system",
    ),
    TemplateCreateInput(
        name="Production Environment",
        description="Conservative weekly cleanup for production environments",
        frequency="WEEKLY",
        day_of_week=6,
        hour=4,
        minute=0,
        retention_days=60,
        min_deployments_to_keep=10,
        tags=["weekly", "conservative", "production", "recommended"],
        storage_provider="s3",
        created_by="system",
    ),
)


async def seed_built_in_templates(service: TemplateService) -> int:
    """Insert the built-in catalogue unless some built-in template already exists."""
    if await service.repository.count_built_in() > 0:
        return 0
    for template in BUILT_IN_TEMPLATES:
        await service.create_built_in_template(template)
    logger.info("Seeded %d built-in templates", len(BUILT_IN_TEMPLATES))
    return len(BUILT_IN_TEMPLATES)

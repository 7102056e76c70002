"""Public exports for cleanup template services."""

from .exceptions import (
    BuiltInTemplateError,
    TemplateError,
    TemplateNotFoundError,
    TemplateVersionConflictError,
    TemplateVersionNotFoundError,
)
from .models import UNSET, CleanupTemplate, TemplateCreateInput, TemplateUpdateInput, TemplateVersion
from .service import TemplateService
from .sharing import ImportResult, TemplateSharingService

__all__ = [
    "BuiltInTemplateError",
    "CleanupTemplate",
    "ImportResult",
    "TemplateCreateInput",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateService",
    "TemplateSharingService",
    "TemplateUpdateInput",
    "TemplateVersion",
    "TemplateVersionConflictError",
    "TemplateVersionNotFoundError",
    "UNSET",
]

"""Template domain specific exceptions."""


class TemplateError(Exception):
    """Base class for template domain errors."""


class TemplateNotFoundError(TemplateError):
    """Raised when the requested template cannot be found."""


class TemplateVersionNotFoundError(TemplateError):
    """Raised when the requested template version cannot be found."""


class BuiltInTemplateError(TemplateError):
    """Raised when a mutation targets a built-in (or vanished) template."""


class TemplateVersionConflictError(TemplateError):
    """Raised when a concurrent write already claimed the next version number."""

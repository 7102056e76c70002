"""Cleanup schedule exceptions."""


class ScheduleError(Exception):
    """Base class for schedule domain errors."""


class ScheduleNotFoundError(ScheduleError):
    """Raised when the requested schedule cannot be found."""


class ScheduleValidationError(ScheduleError):
    """Raised when schedule values break a field rule."""

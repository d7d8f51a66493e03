"""Exceptions for the package configurator."""

from typing import Optional


class ConfiguratorError(Exception):
    """Base class for configurator errors."""
    pass


class ValidationError(ConfiguratorError):
    """
    A user-correctable rule blocks leaving the current step.

    Carries the step being left, the offending field and a message
    suitable for display.
    """

    def __init__(self, message: str, step: str = "", field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step
        self.field = field


class CatalogError(ConfiguratorError):
    """Raised when a catalog item cannot be ingested."""
    pass


class PersistenceError(ConfiguratorError):
    """
    Submitting the selection failed.

    Recoverable: the configuration is left intact for resubmission.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SessionDisposedError(ConfiguratorError):
    """Raised when an operation targets a torn-down configuration session."""
    pass


class SessionBusyError(ConfiguratorError):
    """Raised when an operation overlaps a save still in flight."""
    pass

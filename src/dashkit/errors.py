"""Exception hierarchy for dashkit.

Only ``ConfigurationError`` is ever raised out of the framework, and only
while the application is being assembled. Faults that happen once the
event loop runs are wrapped in ``ProviderError`` for logging and then
absorbed by the dispatcher.
"""

from __future__ import annotations


class DashkitError(Exception):
    """Base class for all dashkit errors."""

    pass


class ConfigurationError(DashkitError, ValueError):
    """Raised when an AppConfig or settings value is unusable."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ProviderError(DashkitError):
    """A provider call failed while the dashboard was running."""

    def __init__(
        self,
        message: str,
        role: str,
        method: str,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.role = role
        self.method = method
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.role}.{self.method}: {super().__str__()}"

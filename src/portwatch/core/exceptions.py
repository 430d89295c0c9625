"""Custom exceptions for Portwatch."""


class PortwatchError(Exception):
    """Base exception for all Portwatch errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AdapterError(PortwatchError):
    """Raised when an OS-level port or process query fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        pid: int | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation
        self.pid = pid


class ProcessNotFoundError(AdapterError):
    """Raised when a process no longer exists."""

    pass


class ActionError(PortwatchError):
    """Raised when a dashboard action (copy, logs, command) fails."""

    def __init__(
        self,
        message: str,
        action: str | None = None,
        pid: int | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.action = action
        self.pid = pid


class ConfigurationError(PortwatchError):
    """Raised when configuration is invalid."""

    pass

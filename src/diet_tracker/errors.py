"""Error types raised by the diet tracker."""


class DietTrackerError(Exception):
    """Base class for diet tracker errors."""


class InvalidDateError(DietTrackerError, ValueError):
    """Raised when a value cannot be interpreted as a calendar date."""


class ValidationError(DietTrackerError, ValueError):
    """Raised when user input falls outside the accepted bounds."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


class NotFoundError(DietTrackerError, LookupError):
    """Raised by callers that choose to surface a missing pattern or record."""


class PersistenceError(DietTrackerError):
    """Raised by storage adapters when a read or write fails."""

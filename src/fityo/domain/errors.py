"""Domain errors raised by services and storage adapters."""

from datetime import date


class FityoError(Exception):
    """Base class for application errors."""


class NotAuthenticated(FityoError):
    """Raised when no valid session is present."""

    def __init__(self) -> None:
        super().__init__("Not authenticated")


class StorageFailure(FityoError):
    """Opaque failure reported by the storage backend."""


class InvalidDate(FityoError):
    """Raised for writes outside today or reads of a future date."""

    def __init__(self, day: date, today: date, message: str | None = None) -> None:
        super().__init__(
            message or f"{day.isoformat()} is read-only; only {today} is editable"
        )
        self.day = day
        self.today = today


class LastMealError(FityoError):
    """Raised when deleting the only remaining meal of a day."""

    def __init__(self) -> None:
        super().__init__("A day must keep at least one meal")


class TemplateNotFound(FityoError):
    """Raised when a template id does not exist for the user."""


class FoodNotFound(FityoError):
    """Raised when a food id does not exist for the user."""


class ConfirmationRequired(FityoError):
    """Raised when a destructive template switch was not confirmed."""

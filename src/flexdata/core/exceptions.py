"""Exceptions shared by the client engine and the remote store."""

from typing import Any


class FlexDataError(Exception):
    """Base class for all FlexData errors."""

    pass


class ValidationError(FlexDataError):
    """Raised locally when a record fails validation before any network call.

    Attributes:
        errors: The individual validation errors (field, message, code).
    """

    def __init__(self, errors: list[Any]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {details}" if details else "Validation failed")

    @property
    def missing_labels(self) -> list[str]:
        """Labels of the required fields that were left empty."""
        return [e.field for e in self.errors if e.code == "required_missing"]


class RemoteWriteError(FlexDataError):
    """Raised when the backing store rejects a create, update or delete."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(f"{message} ({code})" if code else message)


class RemoteReadError(FlexDataError):
    """Raised when fetching from the backing store fails."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

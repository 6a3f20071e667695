"""Error taxonomy shared by services and the API layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation message."""

    field: str
    message: str


class BlogError(Exception):
    """Base exception for blog domain errors."""

    def __init__(self, message: str, code: str = "BLOG_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(BlogError):
    """Raised when input is malformed, missing, or out of range."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[FieldError] | None = None,
    ):
        super().__init__(message, "VALIDATION_ERROR")
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        """Build an error carrying exactly one field message."""
        return cls(message, [FieldError(field, message)])


class NotFoundError(BlogError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found", "NOT_FOUND")
        self.entity = entity


class ConflictError(BlogError):
    """Raised when an operation is blocked by referential state."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class StorageUnavailableError(BlogError):
    """Raised when the database cannot be reached."""

    def __init__(self, message: str = "Storage is unavailable"):
        super().__init__(message, "STORAGE_UNAVAILABLE")

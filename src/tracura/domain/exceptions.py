"""
Tracura - Domain Exceptions

Custom exception hierarchy for structured error handling.
"""
from typing import Any


class TracuraException(Exception):
    """Base exception for all Tracura budget core errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ParseError(TracuraException):
    """Malformed numeric input (quantity, unit price, amount)."""

    def __init__(self, message: str, raw: str | None = None, **kwargs):
        super().__init__(message, {"raw": raw, **kwargs})
        self.raw = raw


class InvariantViolation(TracuraException):
    """Operation would break a structural invariant (e.g. deleting the last department)."""

    def __init__(self, message: str, entity_type: str | None = None, entity_id: str | None = None, **kwargs):
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id, **kwargs})


class ValidationError(TracuraException):
    """Field-level validation failure (surfaced inline, blocks submission only)."""

    def __init__(self, message: str, field_name: str | None = None, **kwargs):
        super().__init__(message, {"field_name": field_name, **kwargs})
        self.field_name = field_name


class RequiredFieldError(ValidationError):
    """Required field left empty."""

    pass


class DateOrderError(ValidationError):
    """Phase end date is not strictly after its start date."""

    pass


class DateRangeError(ValidationError):
    """Phase start date precedes the project planned date."""

    pass


class DuplicateNameError(ValidationError):
    """Phase or department name collides with a sibling (case-insensitive)."""

    def __init__(self, message: str, name: str, field_name: str | None = None, **kwargs):
        super().__init__(message, field_name, name=name, **kwargs)
        self.name = name


class EmptyDraftError(ValidationError):
    """Draft save requested for a form without any data."""

    pass


class SubmissionBlockedError(ValidationError):
    """Submission rejected because the project tree has an invalid field."""

    def __init__(self, message: str, field_ref: Any, **kwargs):
        super().__init__(message, getattr(field_ref, "key", None), **kwargs)
        self.field_ref = field_ref


class RemoteUnavailable(TracuraException):
    """Remote collaborator call failed (network, permission, missing document)."""

    def __init__(self, message: str, path: str | None = None, **kwargs):
        super().__init__(message, {"path": path, **kwargs})


class StorageError(TracuraException):
    """Local snapshot or lookup storage error."""

    def __init__(self, message: str, entity_type: str | None = None, entity_id: str | None = None, **kwargs):
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id, **kwargs})


class NotFoundError(StorageError):
    """Entity not found error."""

    pass


class SnapshotDecodeError(StorageError):
    """Persisted snapshot could not be decoded."""

    pass


class ConfigurationError(TracuraException):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs):
        super().__init__(message, {"config_key": config_key, **kwargs})

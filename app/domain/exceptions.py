"""Errors raised by the trading rule compliance engine."""


class ComplianceError(ValueError):
    """Base class for errors surfaced by the compliance engine."""


class ValidationError(ComplianceError):
    """Raised when a caller supplies data the engine refuses to persist."""


class NotFoundError(ComplianceError):
    """Raised when a referenced rule, trade or violation does not exist."""


class MalformedRuleDataError(ComplianceError):
    """Raised while parsing a stored rule value that cannot be interpreted.

    Evaluation recovers from it locally; it never escapes ``evaluate``.
    """


class StorageError(ComplianceError):
    """Raised when the persistence layer fails; the original error is chained."""


class PermissionDeniedError(ComplianceError):
    """Raised when the acting user may not touch another user's data."""


__all__ = [
    "ComplianceError",
    "MalformedRuleDataError",
    "NotFoundError",
    "PermissionDeniedError",
    "StorageError",
    "ValidationError",
]

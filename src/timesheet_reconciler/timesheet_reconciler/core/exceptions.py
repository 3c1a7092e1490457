class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingDateRange(ValidationError):
    """Raised when a report is requested without both from/to bounds."""


class InvalidInterval(DomainError):
    """Raised for a malformed punch (out before in, or open under strict policy)."""

    def __init__(self, message: str, *, punch=None):
        super().__init__(message)
        self.punch = punch


class DataSourceUnavailable(DomainError):
    """Raised by record sources when the upstream store cannot be read."""


class SerializationError(DomainError):
    """Raised when an exporter cannot encode a field or would emit a duplicate UID."""

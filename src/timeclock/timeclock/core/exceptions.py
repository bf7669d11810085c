class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class IngestionError(DomainError):
    """Raised when an uploaded file yields no usable records at all."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or punch does not exist."""

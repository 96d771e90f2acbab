class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student does not exist."""


class MalformedRecordError(DomainError):
    """Raised when one stored attendance line cannot be decoded."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line!r}")
        self.line = line


class StorageError(DomainError):
    """Raised when the attendance files cannot be read or written."""

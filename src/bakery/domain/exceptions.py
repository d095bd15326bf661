"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or out of range."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or has been soft-deleted)."""


class InsufficientStockError(DomainException):
    """A sale would take more units than the product has remaining."""


class ConflictError(DomainException):
    """A catalog change would break the stock invariant."""


class StorageUnavailableError(DomainException):
    """The underlying persistence could not be reached or read."""

"""Custom exception hierarchy for iou-ledger."""


class LedgerError(Exception):
    """Base exception for all iou-ledger errors."""


class InvalidInputError(LedgerError, ValueError):
    """Raised when an amount, rate, enum value or date is malformed."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced loan or payment does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a payment references a loan that does not exist."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class StorageError(LedgerError):
    """Raised when reading or writing persisted ledger data fails."""

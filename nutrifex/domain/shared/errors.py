"""
Domain exceptions.

Typed exceptions for the pantry persistence layer.
All errors inherit from NutrifexError so callers can catch the whole
family with a single except clause.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class NutrifexError(Exception):
    """
    Base exception for all nutrifex errors.

    Never raised directly.
    """

    pass


# ═══════════════════════════════════════════════════════════
# DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(NutrifexError):
    """
    Entity or value object invariant violated.

    Raised when:
    - Negative macronutrients or quantity amounts
    - Unit not compatible with quantity type
    - Empty id or name, name longer than 200 characters
    - Naive datetimes

    Example:
        >>> raise ValidationError("Serving size must be greater than 0")
    """

    pass


class NotFoundError(NutrifexError):
    """
    Entity not found by id.

    Raised by find_by_id and update when the row does not exist.

    Example:
        >>> raise NotFoundError("Food", "food-123")
    """

    def __init__(self, entity: str, identifier: str, message: Optional[str] = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity} with ID {identifier} not found")


class ReferenceIntegrityError(NutrifexError):
    """
    A write or read violates a foreign-key style reference.

    Raised when:
    - A PantryItem is saved for a Food id that does not exist
    - A PantryItem row references a Food that cannot be loaded
    - Persisted food_id does not match the Food supplied on reconstruction

    Example:
        >>> raise ReferenceIntegrityError("Food food-999 referenced by pantry item not found")
    """

    pass


class TransactionStateError(NutrifexError):
    """
    Transaction operation called out of sequence.

    Raised when:
    - begin_transaction while a transaction is open
    - commit or rollback without an open transaction
    - nested UnitOfWork.execute calls

    Example:
        >>> raise TransactionStateError("Transaction already in progress")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class StorageError(NutrifexError):
    """
    Storage engine operation failed.

    Raised when:
    - SQL statement fails
    - Database used before open() or after close()
    - Unique constraint violated

    Example:
        >>> raise StorageError("Failed to run statement: disk I/O error")
    """

    pass


class MigrationError(StorageError):
    """Schema migration failed; the failed migration was rolled back."""

    def __init__(self, version: int, name: str, cause: BaseException):
        self.version = version
        self.name = name
        super().__init__(f"Migration {version} ({name}) failed: {cause}")

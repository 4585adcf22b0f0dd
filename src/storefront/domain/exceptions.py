"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and return a structured,
user-correctable reason.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business invariant was violated.

    ``reasons`` lists every individual problem found, so the caller can
    fix them all before resubmitting.
    """

    def __init__(self, message: str, reasons: list[str] | tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.reasons = list(reasons)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):
    """The product does not exist or is no longer active."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class InsufficientStock(DomainException):
    """The conditional stock decrement was refused."""

    def __init__(
        self,
        product_id: str,
        requested: int,
        available: int,
        product_name: str | None = None,
    ) -> None:
        super().__init__(
            f"Insufficient stock for {product_name or product_id}. "
            f"Available: {available}"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class StorageError(DomainException):
    """The underlying document store failed (I/O, corrupt document...)."""

    retryable = True


class PersistenceFailed(StorageError):
    """The order could not be written after its stock was reserved.

    Raised only after every reservation has been compensated, so the
    caller may safely retry.
    """

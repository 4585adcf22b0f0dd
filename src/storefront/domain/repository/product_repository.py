"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Besides plain reads it exposes the two stock
primitives the inventory ledger is built on; implementations must make
``decrement_stock_if_available`` a single atomic check-and-decrement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.inventory import StockUpdate
from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock_if_available(self, product_id: str, quantity: int) -> StockUpdate:
        """Atomically decrement stock by *quantity* if at least that much is left.

        Missing or inactive products report NOT_FOUND; a failed
        precondition reports INSUFFICIENT and changes nothing.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> int:
        """Unconditionally add *quantity* to stock and return the new level."""

"""Product aggregate.

Products live independently of orders. They have their own lifecycle
(catalog management, restocking) which happens outside this service;
order placement only reads them and moves their stock through the
inventory ledger.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.  It is decremented only by
    the repository's conditional-decrement primitive.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock}"
            )

    @property
    def is_orderable(self) -> bool:
        return self.is_active

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at reservation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

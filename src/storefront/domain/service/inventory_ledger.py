"""Domain service: Inventory Ledger.

The only component allowed to change a product's stock.  A reservation
is one conditional decrement at the storage boundary, never a read
followed by a separate write, so two concurrent orders can't both take
the last unit.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import InsufficientStock, ProductNotFound
from storefront.domain.model.inventory import Reservation, StockUpdateStatus
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, product_id: str, quantity: int) -> Reservation:
        """Take *quantity* units of a product out of stock.

        Raises ProductNotFound for a missing or inactive product and
        InsufficientStock (with the stock left at that instant) when the
        decrement's precondition fails.
        """
        qty = Quantity(quantity).value
        update = self._product_repo.decrement_stock_if_available(product_id, qty)

        if update.status is StockUpdateStatus.NOT_FOUND or update.product is None:
            raise ProductNotFound(product_id)

        product = update.product
        if update.status is StockUpdateStatus.INSUFFICIENT:
            raise InsufficientStock(
                product_id=product_id,
                requested=qty,
                available=product.stock,
                product_name=product.name,
            )

        logger.debug(
            "stock reserved",
            extra={"product_id": product_id, "quantity": qty, "remaining": product.stock},
        )
        return Reservation(
            product_id=product.id,
            product_name=product.name,
            quantity=qty,
            unit_price=product.price,
            remaining_stock=product.stock,
        )

    def release(self, product_id: str, quantity: int) -> None:
        """Compensate a prior reservation by putting *quantity* back.

        Unconditional: callers must release each granted reservation
        exactly once.
        """
        qty = Quantity(quantity).value
        stock = self._product_repo.increment_stock(product_id, qty)
        logger.debug(
            "stock released",
            extra={"product_id": product_id, "quantity": qty, "remaining": stock},
        )

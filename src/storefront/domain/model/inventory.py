"""Stock movement records exchanged between the ledger and the store.

``StockUpdate`` is what the store's compare-and-set primitive reports;
``Reservation`` is the grant the ledger hands back to the coordinator.
Neither is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


class StockUpdateStatus(Enum):
    APPLIED = "APPLIED"
    INSUFFICIENT = "INSUFFICIENT"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class StockUpdate:
    """Outcome of one conditional decrement.

    ``product`` is the snapshot taken inside the same atomic step: after
    the decrement when APPLIED, untouched when INSUFFICIENT, None when
    the product is missing or inactive.
    """

    status: StockUpdateStatus
    product: Product | None = None

    @property
    def applied(self) -> bool:
        return self.status is StockUpdateStatus.APPLIED


@dataclass(frozen=True)
class Reservation:
    """A granted reservation of ``quantity`` units for one order line.

    ``unit_price`` is the price read together with the decrement; it is
    the snapshot the order is billed at.
    """

    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    remaining_stock: int

"""Domain service: Pricing Calculator.

Pure and stateless.  Every amount is turned into integer minor units
(cents) before it is multiplied or summed, so a total never depends on
the order in which items were added or on float drift.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.inventory import Reservation
from storefront.domain.model.order import OrderItem
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class PricedOrder:
    items: list[OrderItem]
    total: Money


class PricingCalculator:

    def price(self, reservations: Iterable[Reservation]) -> PricedOrder:
        """Build order items from reservations and compute the exact total."""
        items: list[OrderItem] = []
        total_minor = 0
        currency: str | None = None

        for reservation in reservations:
            unit_price = reservation.unit_price.quantize()
            if currency is None:
                currency = unit_price.currency
            elif unit_price.currency != currency:
                raise ValidationError(
                    f"Cannot combine {currency} with {unit_price.currency} in one order"
                )

            total_minor += unit_price.minor_units * reservation.quantity
            items.append(
                OrderItem(
                    product_id=reservation.product_id,
                    product_name=reservation.product_name,
                    quantity=Quantity(reservation.quantity),
                    unit_price=unit_price,
                )
            )

        if not items:
            raise ValidationError("Order must contain at least one item")

        return PricedOrder(items=items, total=Money.from_minor_units(total_minor, currency))


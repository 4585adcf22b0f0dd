"""Order aggregate: the record produced by a successful placement.

The Order is an aggregate root that owns its line items.  It is created
once, atomically, after every line has been reserved; payment and
fulfillment processes may change its statuses later.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


DEFAULT_COUNTRY = "Senegal"


@dataclass(frozen=True)
class OrderLineRequest:
    """What the caller asked for on one line: a product id and a quantity.

    Not persisted; turned into an OrderItem once the stock is reserved.
    """

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ShippingAddress:
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = DEFAULT_COUNTRY


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at reservation time.

    ``unit_price`` never follows later catalog price changes.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at reservation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    items: list[OrderItem]
    total: Money
    shipping_address: ShippingAddress | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderItem],
        total: Money,
        shipping_address: ShippingAddress | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        expected = sum(item.line_total.minor_units for item in items)
        if total.minor_units != expected or total.currency != items[0].unit_price.currency:
            raise ValidationError(
                f"Order total {total} does not match its items "
                f"({Money.from_minor_units(expected, items[0].unit_price.currency)})"
            )

        return Order(
            id=None,
            user_id=user_id.strip(),
            items=list(items),
            total=total,
            shipping_address=shipping_address,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        return self.total.currency

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

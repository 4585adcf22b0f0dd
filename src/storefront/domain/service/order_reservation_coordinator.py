"""Domain service: Order Reservation Coordinator.

Places an order as an all-or-nothing unit of work:

  1. reject malformed input before touching stock,
  2. reserve every line, in the order submitted, through the ledger,
  3. price the reserved items,
  4. persist the order.

Reservations are held by a ``ReservationScope``.  Unless the scope is
committed after the order is durably saved, every grant it holds is
released on the way out, whether the exit is a domain error, a storage
failure or a cancellation such as KeyboardInterrupt.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from storefront.domain.exceptions import (
    DomainException,
    PersistenceFailed,
    ProductNotFound,
    StorageError,
    ValidationError,
)
from storefront.domain.model.inventory import Reservation
from storefront.domain.model.order import (
    MAX_LINE_ITEMS,
    Order,
    OrderLineRequest,
    ShippingAddress,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.pricing_calculator import PricingCalculator

logger = logging.getLogger(__name__)


class ReservationScope:
    """Tracks the reservations granted during one placement attempt.

    Each grant is released at most once: ``release_all`` pops grants
    as it goes, and a failed reservation is never recorded.
    """

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger
        self._granted: list[Reservation] = []
        self._committed = False

    def __enter__(self) -> ReservationScope:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._committed:
            self.release_all()
        return False

    @property
    def reservations(self) -> list[Reservation]:
        return list(self._granted)

    def reserve(self, product_id: str, quantity: int) -> Reservation:
        reservation = self._ledger.reserve(product_id, quantity)
        self._granted.append(reservation)
        return reservation

    def commit(self) -> None:
        """Keep the reservations: the order that owns them is persisted."""
        self._committed = True
        self._granted.clear()

    def release_all(self) -> None:
        """Undo every grant still held.  Releases are independent of each other."""
        while self._granted:
            reservation = self._granted.pop()
            try:
                self._ledger.release(reservation.product_id, reservation.quantity)
            except Exception:
                # Keep compensating the remaining lines; the error that
                # triggered compensation is the one the caller sees.
                logger.exception(
                    "compensation failed, stock left decremented",
                    extra={
                        "product_id": reservation.product_id,
                        "quantity": reservation.quantity,
                    },
                )


class OrderReservationCoordinator:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        ledger: InventoryLedger | None = None,
        pricing: PricingCalculator | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._ledger = ledger or InventoryLedger(product_repo)
        self._pricing = pricing or PricingCalculator()

    def place_order(
        self,
        user_id: str,
        lines: Sequence[OrderLineRequest],
        shipping_address: ShippingAddress | None = None,
    ) -> Order:
        """Reserve, price and persist an order, or leave no trace.

        Raises:
            ValidationError: malformed request; nothing was reserved.
            ProductNotFound / InsufficientStock: a line could not be
                reserved; earlier lines were released.
            StorageError: the store failed while reserving; earlier
                lines were released.
            PersistenceFailed: the order could not be saved; every line
                was released and the call may be retried.
        """
        self._validate(user_id, lines)

        try:
            with ReservationScope(self._ledger) as scope:
                for line in lines:
                    product = self._product_repo.get_by_id(line.product_id)
                    if product is None or not product.is_orderable:
                        raise ProductNotFound(line.product_id)
                    scope.reserve(line.product_id, line.quantity)

                priced = self._pricing.price(scope.reservations)
                order = Order.create(
                    user_id=user_id,
                    items=priced.items,
                    total=priced.total,
                    shipping_address=shipping_address,
                )

                try:
                    self._order_repo.save(order)
                except StorageError as exc:
                    raise PersistenceFailed(f"Order could not be saved: {exc}") from exc

                scope.commit()
        except DomainException as exc:
            logger.warning(
                "order placement aborted",
                extra={"user_id": user_id, "reason": type(exc).__name__, "detail": str(exc)},
            )
            raise

        logger.info(
            "order placed",
            extra={
                "order_id": order.id,
                "user_id": order.user_id,
                "total": order.total.to_plain_string(),
                "lines": len(order.items),
            },
        )
        return order

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validate(user_id: str, lines: Sequence[OrderLineRequest]) -> None:
        reasons: list[str] = []
        if not isinstance(user_id, str) or not user_id.strip():
            reasons.append("userId is required")
        if not lines:
            reasons.append("items must contain at least one line")
        elif len(lines) > MAX_LINE_ITEMS:
            reasons.append(f"items must contain at most {MAX_LINE_ITEMS} lines")
        for index, line in enumerate(lines or ()):
            if not isinstance(line.product_id, str) or not line.product_id.strip():
                reasons.append(f"items.{index}.productId is required")
            quantity = line.quantity
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                reasons.append(f"items.{index}.quantity must be a positive integer")
        if reasons:
            raise ValidationError("Invalid order request: " + "; ".join(reasons), reasons)

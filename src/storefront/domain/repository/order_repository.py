"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.order import Order, OrderStatus


@dataclass(frozen=True)
class OrderQuery:
    """Filter for read paths.  Results are ordered newest first."""

    status: OrderStatus | None = None
    user_id: str | None = None
    offset: int = 0
    limit: int | None = None

    def matches(self, order: Order) -> bool:
        if self.status is not None and order.status != self.status:
            return False
        if self.user_id is not None and order.user_id != self.user_id:
            return False
        return True


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist the complete order document in one atomic write.

        Assigns ``order.id`` when it is None.  Raises StorageError when
        the write cannot be made durable.
        """

    @abstractmethod
    def find(self, query: OrderQuery) -> list[Order]:
        """Return the page of orders matching *query*, newest first."""

    @abstractmethod
    def count(self, query: OrderQuery) -> int:
        """Count every order matching *query*, ignoring offset and limit."""

"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    ShippingAddress,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderQuery, OrderRepository
from storefront.infrastructure.persistence.json_collection import JsonCollection


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._collection.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._collection.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._collection.transaction() as orders:
            order_id = order.id if order.id is not None else self._next_id(orders)
            raw = self._to_raw(order, order_id)

            # Upsert: replace if exists, otherwise append
            for i, existing in enumerate(orders):
                if existing["id"] == order_id:
                    orders[i] = raw
                    break
            else:
                orders.append(raw)

        # Only visible to the caller once the write went through.
        order.id = order_id

    def find(self, query: OrderQuery) -> list[Order]:
        matching = self._matching(query)
        end = None if query.limit is None else query.offset + query.limit
        return matching[query.offset:end]

    def count(self, query: OrderQuery) -> int:
        return len(self._matching(query))

    # --- Query helpers --------------------------------------------------------

    def _matching(self, query: OrderQuery) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._collection.load()]
        matching = [o for o in orders if query.matches(o)]
        matching.sort(key=lambda o: (o.created_at, o.id or 0), reverse=True)
        return matching

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order, order_id: int) -> dict:
        address = order.shipping_address
        return {
            "id": order_id,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "created_at": order.created_at.isoformat(),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "shipping_address": None if address is None else {
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", currency)),
            )
            for i in raw["items"]
        ]
        address = raw.get("shipping_address")
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            total=Money(Decimal(raw["total"]), currency),
            shipping_address=ShippingAddress(**address) if address else None,
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

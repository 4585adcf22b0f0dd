"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.show_stock import ShowStockHandler
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def product_repository(data_dir: Path) -> JsonProductRepository:
    return JsonProductRepository(data_dir / "products.json")


def order_repository(data_dir: Path) -> JsonOrderRepository:
    return JsonOrderRepository(data_dir / "orders.json")


def user_repository(data_dir: Path) -> JsonUserRepository:
    return JsonUserRepository(data_dir / "users.json")


@dataclass(frozen=True)
class Services:
    """Repositories shared by every request for the life of the process."""

    products: ProductRepository
    orders: OrderRepository
    users: UserRepository

    def place_order(self) -> PlaceOrderHandler:
        return PlaceOrderHandler(self.orders, self.products, self.users)

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.orders, self.products, self.users)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.orders, self.products, self.users)

    def show_stock(self) -> ShowStockHandler:
        return ShowStockHandler(self.products)


def build_services(settings: Settings | None = None) -> Services:
    settings = settings or Settings.from_env()
    return Services(
        products=product_repository(settings.data_dir),
        orders=order_repository(settings.data_dir),
        users=user_repository(settings.data_dir),
    )

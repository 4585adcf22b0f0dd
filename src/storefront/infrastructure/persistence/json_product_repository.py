"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.inventory import StockUpdate, StockUpdateStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_collection import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._find(self._collection.load(), product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, product: Product) -> None:
        with self._collection.transaction() as records:
            raw = self._find(records, product.id)
            if raw is None:
                records.append(self._to_raw(product))
            else:
                raw.update(self._to_raw(product))

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> StockUpdate:
        with self._collection.transaction() as records:
            raw = self._find(records, product_id)
            if raw is None or not raw.get("is_active", True):
                return StockUpdate(StockUpdateStatus.NOT_FOUND)

            product = self._to_domain(raw)
            if product.stock < quantity:
                return StockUpdate(StockUpdateStatus.INSUFFICIENT, product)

            raw["stock"] = product.stock - quantity
            return StockUpdate(
                StockUpdateStatus.APPLIED,
                dataclasses.replace(product, stock=raw["stock"]),
            )

    def increment_stock(self, product_id: str, quantity: int) -> int:
        with self._collection.transaction() as records:
            raw = self._find(records, product_id)
            if raw is None:
                raise EntityNotFoundError(f"Product with ID {product_id} not found")
            raw["stock"] = int(raw.get("stock", 0)) + quantity
            return raw["stock"]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find(records: list[dict], product_id: str) -> dict | None:
        for raw in records:
            if raw["id"] == product_id:
                return raw
        return None

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "is_active": product.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(str(raw["price"])), raw.get("currency", "USD")),
            stock=int(raw.get("stock", 0)),
            is_active=bool(raw.get("is_active", True)),
        )

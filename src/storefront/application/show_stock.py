"""Application service: Show Stock use case (query).

Stock levels as seen by reporting consumers.  Never mutates.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    product_name: str
    price: str
    stock: int
    is_active: bool


class ShowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[StockLineDTO]:
        products = self._product_repo.list_all()
        return [
            StockLineDTO(
                product_id=product.id,
                product_name=product.name,
                price=str(product.price),
                stock=product.stock,
                is_active=product.is_active,
            )
            for product in products
        ]

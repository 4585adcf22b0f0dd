"""Order -> OrderDTO mapping shared by the order use cases.

Resolves the product and user summaries the caller sees alongside an
order.  Reads only; a product or user that no longer exists, or whose
collection cannot be read, still maps with whatever the order itself
recorded.  Mapping never fails once the order is in hand: after a
placement the order is already saved and its stock taken.
"""

from __future__ import annotations

import logging

from storefront.application.dto import (
    OrderDTO,
    OrderItemDTO,
    ProductSummaryDTO,
    ShippingAddressDTO,
    UserSummaryDTO,
)
from storefront.domain.exceptions import StorageError
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class OrderDTOMapper:

    def __init__(self, product_repo: ProductRepository, user_repo: UserRepository) -> None:
        self._product_repo = product_repo
        self._user_repo = user_repo

    def to_dto(self, order: Order) -> OrderDTO:
        user = self._lookup_user(order)
        address = order.shipping_address
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user=UserSummaryDTO(
                id=order.user_id,
                name=user.name if user else None,
                email=user.email if user else None,
            ),
            items=[
                OrderItemDTO(
                    product=self._product_summary(item.product_id, item.product_name),
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.to_plain_string(),
                    line_total=item.line_total.to_plain_string(),
                )
                for item in order.items
            ],
            total=order.total.to_plain_string(),
            currency=order.currency,
            shipping_address=None if address is None else ShippingAddressDTO(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            status=order.status.value,
            payment_status=order.payment_status.value,
            created_at=order.created_at.isoformat(),
        )

    def _lookup_user(self, order: Order) -> User | None:
        try:
            return self._user_repo.get_by_id(order.user_id)
        except StorageError as exc:
            logger.warning(
                "user summary unavailable",
                extra={"order_id": order.id, "user_id": order.user_id, "detail": str(exc)},
            )
            return None

    def _lookup_product(self, product_id: str) -> Product | None:
        try:
            return self._product_repo.get_by_id(product_id)
        except StorageError as exc:
            logger.warning(
                "product summary unavailable",
                extra={"product_id": product_id, "detail": str(exc)},
            )
            return None

    def _product_summary(self, product_id: str, recorded_name: str) -> ProductSummaryDTO:
        product = self._lookup_product(product_id)
        if product is None:
            return ProductSummaryDTO(id=product_id, name=recorded_name, price=None)
        return ProductSummaryDTO(
            id=product.id,
            name=product.name,
            price=product.price.to_plain_string(),
        )

"""Application service: List Orders use case (query).

Read-only listing with optional status/user filters and page-based
pagination, newest orders first.
"""

from __future__ import annotations

import math

from storefront.application.dto import OrderPageDTO, PaginationDTO
from storefront.application.order_mapping import OrderDTOMapper
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderQuery, OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._mapper = OrderDTOMapper(product_repo, user_repo)

    def handle(
        self,
        status: str | None = None,
        user_id: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPageDTO:
        if page < 1:
            raise ValidationError("page must be at least 1", ["page: must be at least 1"])
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}",
                [f"limit: must be between 1 and {MAX_PAGE_SIZE}"],
            )

        filters = OrderQuery(status=self._parse_status(status), user_id=user_id or None)
        total = self._order_repo.count(filters)
        orders = self._order_repo.find(
            OrderQuery(
                status=filters.status,
                user_id=filters.user_id,
                offset=(page - 1) * limit,
                limit=limit,
            )
        )

        return OrderPageDTO(
            orders=[self._mapper.to_dto(order) for order in orders],
            pagination=PaginationDTO(
                page=page,
                pages=math.ceil(total / limit),
                total=total,
                limit=limit,
            ),
        )

    @staticmethod
    def _parse_status(status: str | None) -> OrderStatus | None:
        if not status:
            return None
        try:
            return OrderStatus(status.lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{status}'",
                [f"status: must be one of {allowed}"],
            )

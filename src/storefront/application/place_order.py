"""Application service: Place Order use case.

The entry point for order placement.  Validates the request shape,
hands a well-formed command to the reservation coordinator and maps the
persisted order to a DTO.  Every failure surfaces as a DomainException
subclass carrying enough detail to correct and resubmit.
"""

from __future__ import annotations

from typing import Any

from storefront.application.dto import OrderDTO, PlaceOrderCommand
from storefront.application.order_mapping import OrderDTOMapper
from storefront.application.validation import InvalidOrderRequest, parse_place_order
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.service.order_reservation_coordinator import (
    OrderReservationCoordinator,
)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._coordinator = OrderReservationCoordinator(product_repo, order_repo)
        self._mapper = OrderDTOMapper(product_repo, user_repo)

    def handle(self, payload: Any) -> OrderDTO:
        """Place an order from a raw request body.

        Steps:
        1. Map the body to a validated command (no side effects).
        2. Reserve, price and persist through the coordinator.
        3. Return the order with product and user summaries.
        """
        result = parse_place_order(payload)
        if isinstance(result, InvalidOrderRequest):
            raise ValidationError(
                "Invalid order request: " + "; ".join(result.reasons),
                result.reasons,
            )
        return self.handle_command(result.command)

    def handle_command(self, command: PlaceOrderCommand) -> OrderDTO:
        order = self._coordinator.place_order(
            user_id=command.user_id,
            lines=command.lines,
            shipping_address=command.shipping_address,
        )
        return self._mapper.to_dto(order)

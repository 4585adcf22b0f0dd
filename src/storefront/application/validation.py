"""Shape validation for incoming order requests.

Request bodies arrive as loosely typed JSON.  ``parse_place_order``
maps them to an explicit result: either ``ValidOrderRequest`` holding a
``PlaceOrderCommand`` or ``InvalidOrderRequest`` listing every reason
the body was rejected.  Nothing downstream sees an unvalidated body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from storefront.application.dto import PlaceOrderCommand
from storefront.domain.model.order import (
    DEFAULT_COUNTRY,
    MAX_LINE_ITEMS,
    OrderLineRequest,
    ShippingAddress,
)

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PositiveInt = Annotated[int, Field(strict=True, gt=0)]


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OrderLineIn(_Body):
    product_id: NonBlankStr = Field(alias="productId")
    quantity: PositiveInt


class ShippingAddressIn(_Body):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = Field(default=None, alias="zipCode")
    country: str | None = DEFAULT_COUNTRY


class PlaceOrderIn(_Body):
    user_id: NonBlankStr = Field(alias="userId")
    items: list[OrderLineIn] = Field(min_length=1, max_length=MAX_LINE_ITEMS)
    shipping_address: ShippingAddressIn | None = Field(default=None, alias="shippingAddress")


@dataclass(frozen=True)
class ValidOrderRequest:
    command: PlaceOrderCommand


@dataclass(frozen=True)
class InvalidOrderRequest:
    reasons: tuple[str, ...]


OrderRequestResult = Union[ValidOrderRequest, InvalidOrderRequest]


def parse_place_order(payload: Any) -> OrderRequestResult:
    """Validate a raw request body without side effects."""
    try:
        body = PlaceOrderIn.model_validate(payload)
    except PydanticValidationError as exc:
        return InvalidOrderRequest(tuple(_reason(err) for err in exc.errors()))

    address = None
    if body.shipping_address is not None:
        address = ShippingAddress(**body.shipping_address.model_dump())

    command = PlaceOrderCommand(
        user_id=body.user_id,
        lines=tuple(
            OrderLineRequest(product_id=line.product_id, quantity=line.quantity)
            for line in body.items
        ),
        shipping_address=address,
    )
    return ValidOrderRequest(command)


def _reason(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]

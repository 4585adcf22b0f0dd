"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals to the outside world.  Money is
rendered as fixed-point strings ("19.98"), never floats.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import OrderLineRequest, ShippingAddress


@dataclass(frozen=True)
class PlaceOrderCommand:
    """Input: a request that passed shape validation."""

    user_id: str
    lines: tuple[OrderLineRequest, ...]
    shipping_address: ShippingAddress | None = None


@dataclass(frozen=True)
class ProductSummaryDTO:
    id: str
    name: str
    price: str | None  # current catalog price, None if the product is gone


@dataclass(frozen=True)
class UserSummaryDTO:
    id: str
    name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class ShippingAddressDTO:
    street: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    country: str | None


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item."""

    product: ProductSummaryDTO
    quantity: int
    unit_price: str  # snapshot, e.g. "9.99"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: int
    user: UserSummaryDTO
    items: list[OrderItemDTO]
    total: str
    currency: str
    shipping_address: ShippingAddressDTO | None
    status: str
    payment_status: str
    created_at: str  # ISO-8601, UTC


@dataclass(frozen=True)
class PaginationDTO:
    page: int
    pages: int
    total: int
    limit: int


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    pagination: PaginationDTO

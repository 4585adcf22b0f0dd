"""Pydantic response schemas for the orders API.

Built from the application DTOs (``from_attributes``) and serialized
with camelCase keys, matching the request body's naming.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Out(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ProductSummaryOut(_Out):
    id: str
    name: str
    price: str | None = None


class UserSummaryOut(_Out):
    id: str
    name: str | None = None
    email: str | None = None


class ShippingAddressOut(_Out):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class OrderItemOut(_Out):
    product: ProductSummaryOut
    quantity: int
    unit_price: str
    line_total: str


class OrderOut(_Out):
    id: int
    user: UserSummaryOut
    items: list[OrderItemOut]
    total: str
    currency: str
    shipping_address: ShippingAddressOut | None = None
    status: str
    payment_status: str
    created_at: str


class PaginationOut(_Out):
    page: int
    pages: int
    total: int
    limit: int


def dump(model: type[_Out], dto: object) -> dict:
    """Validate a DTO into *model* and return its camelCase JSON form."""
    return model.model_validate(dto, from_attributes=True).model_dump(mode="json", by_alias=True)

"""Order endpoints.

Routes are plain ``def`` functions, so FastAPI runs them on its
threadpool and concurrent placements really do race at the store.
Domain errors are not caught here; ``app.py`` maps them to responses.
"""

from typing import Any

from fastapi import APIRouter, Body, Query, Request
from fastapi.responses import JSONResponse

from storefront.infrastructure.api.schemas import OrderOut, PaginationOut, dump
from storefront.infrastructure.bootstrap import Services

router = APIRouter(prefix="/orders", tags=["orders"])


def _services(request: Request) -> Services:
    return request.app.state.services


@router.post("", status_code=201)
def create_order(request: Request, payload: Any = Body(default=None)):
    """Place an order: reserve every line, price it, persist it."""
    dto = _services(request).place_order().handle(payload)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": "Order created successfully",
            "order": dump(OrderOut, dto),
        },
    )


@router.get("")
def list_orders(
    request: Request,
    status: str | None = None,
    user_id: str | None = Query(default=None, alias="userId"),
    page: int = 1,
    limit: int = 10,
):
    result = _services(request).list_orders().handle(
        status=status, user_id=user_id, page=page, limit=limit
    )
    return {
        "success": True,
        "orders": [dump(OrderOut, order) for order in result.orders],
        "pagination": dump(PaginationOut, result.pagination),
    }


@router.get("/{order_id}")
def get_order(request: Request, order_id: int):
    dto = _services(request).show_order().handle(order_id)
    return {"success": True, "order": dump(OrderOut, dto)}

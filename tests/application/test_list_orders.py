"""Tests for the ListOrders and ShowOrder query use cases."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.show_stock import ShowStockHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository, FakeProductRepository, FakeUserRepository


def _order(user_id: str, minutes: int, status: OrderStatus = OrderStatus.PENDING) -> Order:
    item = OrderItem("p1", "Widget", Quantity(1), Money.of("10.00"))
    order = Order.create(user_id, [item], Money.of("10.00"))
    order.status = status
    order.created_at = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return order


def _setup():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(
        [Product(id="p1", name="Widget", price=Money.of("10.00"), stock=3)]
    )
    for order in [
        _order("u1", 1),
        _order("u2", 2),
        _order("u1", 3, OrderStatus.CANCELLED),
        _order("u1", 4),
    ]:
        order_repo.save(order)
    user_repo = FakeUserRepository()
    return order_repo, product_repo, user_repo


class TestListOrders:

    def test_newest_first(self):
        handler = ListOrdersHandler(*_setup())
        result = handler.handle()
        assert [o.id for o in result.orders] == [4, 3, 2, 1]
        assert result.pagination.total == 4
        assert result.pagination.pages == 1

    def test_filter_by_user_and_status(self):
        handler = ListOrdersHandler(*_setup())
        result = handler.handle(status="pending", user_id="u1")
        assert [o.id for o in result.orders] == [4, 1]
        assert result.pagination.total == 2

    def test_pagination(self):
        handler = ListOrdersHandler(*_setup())
        result = handler.handle(page=2, limit=3)
        assert [o.id for o in result.orders] == [1]
        assert result.pagination.page == 2
        assert result.pagination.pages == 2
        assert result.pagination.total == 4

    def test_empty_page_has_no_pages(self):
        handler = ListOrdersHandler(FakeOrderRepository(), FakeProductRepository(), FakeUserRepository())
        result = handler.handle()
        assert result.orders == []
        assert result.pagination.pages == 0

    def test_unknown_status_rejected(self):
        handler = ListOrdersHandler(*_setup())
        with pytest.raises(ValidationError, match="Unknown order status"):
            handler.handle(status="lost")

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 101)])
    def test_bad_paging_rejected(self, page, limit):
        handler = ListOrdersHandler(*_setup())
        with pytest.raises(ValidationError):
            handler.handle(page=page, limit=limit)


class TestShowOrder:

    def test_show_existing(self):
        handler = ShowOrderHandler(*_setup())
        dto = handler.handle(2)
        assert dto.user.id == "u2"
        assert dto.total == "10.00"

    def test_missing_order(self):
        handler = ShowOrderHandler(*_setup())
        with pytest.raises(EntityNotFoundError, match="Order #99 not found"):
            handler.handle(99)


class TestShowStock:

    def test_lists_stock_levels(self):
        _, product_repo, _ = _setup()
        lines = ShowStockHandler(product_repo).handle()
        assert [(l.product_id, l.stock, l.price) for l in lines] == [("p1", 3, "$10.00")]

"""Unit tests for the PricingCalculator domain service."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.inventory import Reservation
from storefront.domain.model.value_objects import Money
from storefront.domain.service.pricing_calculator import PricingCalculator


def _reservation(pid: str, qty: int, price: str, currency: str = "USD") -> Reservation:
    return Reservation(
        product_id=pid,
        product_name=f"Product {pid}",
        quantity=qty,
        unit_price=Money.of(price, currency),
        remaining_stock=0,
    )


class TestPrice:

    def test_single_item_total_is_exact(self):
        priced = PricingCalculator().price([_reservation("p1", 2, "9.99")])
        assert priced.total == Money.of("19.98")
        assert priced.total.to_plain_string() == "19.98"

    def test_items_keep_submitted_order(self):
        priced = PricingCalculator().price(
            [_reservation("b", 1, "1.00"), _reservation("a", 1, "2.00")]
        )
        assert [i.product_id for i in priced.items] == ["b", "a"]

    def test_no_float_drift_over_many_items(self):
        # 0.1 + 0.2 style amounts summed many times stay exact
        reservations = [_reservation(f"p{i}", 3, "0.10") for i in range(10)] + [
            _reservation("q", 1, "0.20")
        ]
        priced = PricingCalculator().price(reservations)
        assert priced.total.minor_units == 320
        assert priced.total == Money.of("3.20")

    def test_total_identical_across_runs(self):
        reservations = [_reservation("p1", 7, "13.37"), _reservation("p2", 3, "0.99")]
        totals = {PricingCalculator().price(reservations).total for _ in range(20)}
        assert totals == {Money.of("96.56")}

    def test_sub_cent_prices_rounded_half_even_per_unit(self):
        priced = PricingCalculator().price([_reservation("p1", 4, "2.125")])
        assert priced.items[0].unit_price == Money.of("2.12")
        assert priced.total == Money.of("8.48")

    def test_line_totals_sum_to_total(self):
        priced = PricingCalculator().price(
            [_reservation("p1", 3, "4.35"), _reservation("p2", 2, "10.01")]
        )
        line_sum = sum(item.line_total.minor_units for item in priced.items)
        assert line_sum == priced.total.minor_units

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            PricingCalculator().price(
                [_reservation("p1", 1, "1.00", "USD"), _reservation("p2", 1, "1.00", "EUR")]
            )

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            PricingCalculator().price([])

"""CLI tests using click's CliRunner over in-memory repositories."""

import pytest
from click.testing import CliRunner

from storefront.domain.exceptions import StorageError
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import Services
from storefront.infrastructure.cli.main import cli
from tests.fakes import FakeOrderRepository, FakeProductRepository, FakeUserRepository


@pytest.fixture
def services():
    return Services(
        products=FakeProductRepository(
            [
                Product(id="p1", name="Widget", price=Money.of("10.00"), stock=5),
                Product(id="p2", name="Gadget", price=Money.of("9.99"), stock=3, is_active=False),
            ]
        ),
        orders=FakeOrderRepository(),
        users=FakeUserRepository([User(id="u1", name="Alice", email="alice@example.com")]),
    )


@pytest.fixture
def run(services):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args), obj=services)

    return invoke


class TestOrderCommands:

    def test_place(self, run, services):
        result = run("order", "place", "--user", "u1", "--items", "p1:2", "--city", "Dakar")
        assert result.exit_code == 0, result.output
        assert "Order created successfully" in result.output
        assert "Order #1" in result.output
        assert "20.00 USD" in result.output
        assert "Dakar, Senegal" in result.output
        assert services.products.stock_of("p1") == 3

    def test_place_insufficient_stock(self, run, services):
        result = run("order", "place", "--user", "u1", "--items", "p1:9")
        assert result.exit_code == 1
        assert "Insufficient stock for Widget. Available: 5" in result.output
        assert services.products.stock_of("p1") == 5

    def test_place_lists_validation_reasons(self, run):
        result = run("order", "place", "--user", "u1", "--items", "p1:0")
        assert result.exit_code == 1
        assert "items.0.quantity" in result.output

    def test_place_bad_item_format(self, run):
        result = run("order", "place", "--user", "u1", "--items", "p1")
        assert result.exit_code == 2
        assert "Expected 'ProductId:Quantity'" in result.output

    def test_show(self, run):
        run("order", "place", "--user", "u1", "--items", "p1:1")
        result = run("order", "show", "--id", "1")
        assert result.exit_code == 0
        assert "User:     Alice" in result.output
        assert "Widget" in result.output

    def test_show_missing(self, run):
        result = run("order", "show", "--id", "7")
        assert result.exit_code == 1
        assert "Order #7 not found" in result.output

    def test_list(self, run):
        run("order", "place", "--user", "u1", "--items", "p1:1")
        run("order", "place", "--user", "u1", "--items", "p1:2")
        result = run("order", "list", "--user", "u1")
        assert result.exit_code == 0
        assert "Page 1 of 1 (2 orders)" in result.output

    def test_list_empty(self, run):
        result = run("order", "list")
        assert result.exit_code == 0
        assert "No orders found." in result.output


class TestStockCommands:

    def test_show(self, run):
        result = run("stock", "show")
        assert result.exit_code == 0
        assert "Widget" in result.output
        assert "$10.00" in result.output
        lines = [line for line in result.output.splitlines() if line.startswith("p2")]
        assert lines and lines[0].rstrip().endswith("no")

    def test_show_unreadable_catalog(self, run, services, monkeypatch):
        def unreadable():
            raise StorageError("products.json does not hold a list of documents")

        monkeypatch.setattr(services.products, "list_all", unreadable)
        result = run("stock", "show")
        assert result.exit_code == 1
        assert "Error: products.json does not hold a list of documents" in result.output


class TestServeCommand:

    def test_serve_runs_uvicorn_with_settings(self, run, services, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr("storefront.infrastructure.cli.main.uvicorn.run", fake_run)
        monkeypatch.setattr(
            "storefront.infrastructure.cli.main.configure_logging",
            lambda level, fmt: calls.update(logging=(level, fmt)),
        )
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "text")
        monkeypatch.setenv("HOST", "127.0.0.1")

        result = run("serve", "--port", "8081")

        assert result.exit_code == 0, result.output
        assert calls["host"] == "127.0.0.1"
        assert calls["port"] == 8081
        assert calls["log_level"] == "debug"
        assert calls["log_config"] is None
        assert calls["logging"] == ("DEBUG", "text")
        assert calls["app"].state.services is services

"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, PlaceOrderCommand
from storefront.domain.exceptions import DomainException, ValidationError
from storefront.domain.model.order import DEFAULT_COUNTRY, OrderLineRequest, ShippingAddress


def _parse_items(raw: str) -> list[OrderLineRequest]:
    """Parse 'p1:3,p2:5' into OrderLineRequest list."""
    lines: list[OrderLineRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        lines.append(OrderLineRequest(product_id=product_id.strip(), quantity=qty))
    return lines


def _fail(exc: DomainException) -> click.ClickException:
    message = str(exc)
    if isinstance(exc, ValidationError) and exc.reasons:
        message += "".join(f"\n  - {reason}" for reason in exc.reasons)
    return click.ClickException(message)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    user = dto.user.name or dto.user.id
    click.echo(f"User:     {user}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipping_address is not None:
        address = dto.shipping_address
        parts = [address.street, address.city, address.state, address.zip_code, address.country]
        click.echo(f"Ship to:  {', '.join(p for p in parts if p)}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total + ' ' + dto.currency:>20}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="User ID placing the order.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--street", default=None, help="Shipping street.")
@click.option("--city", default=None, help="Shipping city.")
@click.option("--state", default=None, help="Shipping state.")
@click.option("--zip", "zip_code", default=None, help="Shipping ZIP code.")
@click.option("--country", default=DEFAULT_COUNTRY, show_default=True, help="Shipping country.")
@click.pass_obj
def order_place(services, user_id, items, street, city, state, zip_code, country) -> None:
    """Place an order (reserves stock for every line or for none)."""
    command = PlaceOrderCommand(
        user_id=user_id,
        lines=tuple(_parse_items(items)),
        shipping_address=ShippingAddress(
            street=street, city=city, state=state, zip_code=zip_code, country=country
        ),
    )

    try:
        dto = services.place_order().handle_command(command)
    except DomainException as exc:
        raise _fail(exc)

    click.echo("Order created successfully")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(services, order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = services.show_order().handle(order_id)
    except DomainException as exc:
        raise _fail(exc)

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Filter by order status.")
@click.option("--user", "user_id", default=None, help="Filter by user ID.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
@click.pass_obj
def order_list(services, status, user_id, page: int, limit: int) -> None:
    """List orders, newest first."""
    try:
        result = services.list_orders().handle(
            status=status, user_id=user_id, page=page, limit=limit
        )
    except DomainException as exc:
        raise _fail(exc)

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<16} {'Status':<11} {'Items':>5} {'Total':>12}")
    click.echo("-" * 54)
    for dto in result.orders:
        qty = sum(item.quantity for item in dto.items)
        click.echo(f"{dto.id:<6} {dto.user.id:<16} {dto.status:<11} {qty:>5} {dto.total:>12}")
    p = result.pagination
    click.echo(f"Page {p.page} of {p.pages} ({p.total} orders)")

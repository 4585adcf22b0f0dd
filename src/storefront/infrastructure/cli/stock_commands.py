"""CLI commands for stock levels (read-only)."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException


@click.command("show")
@click.pass_obj
def stock_show(services) -> None:
    """Show current stock levels."""
    try:
        lines = services.show_stock().handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Product':<20} {'Price':>10} {'Stock':>7} {'Active':>7}")
    click.echo("-" * 58)
    for line in lines:
        active = "yes" if line.is_active else "no"
        click.echo(
            f"{line.product_id:<10} {line.product_name:<20} {line.price:>10} {line.stock:>7} {active:>7}"
        )

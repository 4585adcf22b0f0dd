import click
import uvicorn

from storefront.domain.exceptions import StorageError
from storefront.infrastructure.api.app import create_app
from storefront.infrastructure.bootstrap import build_services
from storefront.infrastructure.cli.order_commands import order_list, order_place, order_show
from storefront.infrastructure.cli.stock_commands import stock_show
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront order placement service."""
    settings = Settings.from_env()
    ctx.meta["settings"] = settings
    if ctx.obj is None:
        try:
            ctx.obj = build_services(settings)
        except StorageError as exc:
            raise click.ClickException(str(exc))


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def stock() -> None:
    """Inspect stock levels."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Port (default: $PORT or 3000).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings: Settings = ctx.meta["settings"]
    configure_logging(settings.log_level, settings.log_format)
    app = create_app(settings, services=ctx.obj)
    # One worker: stock compare-and-set is serialized in-process.
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )


# Register subcommands
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_list)
stock.add_command(stock_show)

import logging

import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import cart_add, cart_remove, cart_show
from storefront.infrastructure.cli.favorite_commands import (
    favorite_check,
    favorite_list,
    favorite_toggle,
)
from storefront.infrastructure.cli.order_commands import (
    order_all,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Storefront — catalog, cart, checkout and orders"""
    try:
        cfg = settings()
        level = logging.DEBUG if verbose else cfg.log_level
        logging.basicConfig(level=level, format=LOG_FORMAT)
    except ValueError as exc:
        raise click.UsageError(f"Bad configuration: {exc}")


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Check out and track orders."""


@cli.group()
def favorite() -> None:
    """Manage favorites."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_show)
order.add_command(order_all)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
favorite.add_command(favorite_check)
favorite.add_command(favorite_list)
favorite.add_command(favorite_toggle)

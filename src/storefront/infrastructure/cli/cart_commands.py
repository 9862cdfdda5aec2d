"""CLI commands for the caller's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Caller
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.identity import with_caller


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Desired quantity.")
@with_caller
def cart_add(caller: Caller, product_id: str, quantity: int) -> None:
    """Add a product to the cart, or change its quantity."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        line = handler.handle(caller, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart: {line.product_id} x {line.quantity}")


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
@with_caller
def cart_remove(caller: Caller, product_id: str) -> None:
    """Remove a product from the cart."""
    try:
        RemoveFromCartHandler(cart_repository()).handle(caller, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {product_id} from cart.")


@click.command("show")
@with_caller
def cart_show(caller: Caller) -> None:
    """Show the cart with current prices."""
    handler = ShowCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        cart = handler.handle(caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not cart.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in cart.lines:
        if not line.available:
            click.echo(f"  {line.product_id:<20} {line.quantity:>5}   (no longer available)")
            continue
        note = "" if line.in_stock else "  (low stock)"
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}{note}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {cart.total:>20}")

"""CLI commands for the caller's favorites."""

from __future__ import annotations

import click

from storefront.application.show_favorites import IsFavoriteHandler, ListFavoritesHandler
from storefront.application.toggle_favorite import ToggleFavoriteHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Caller
from storefront.infrastructure.bootstrap import favorites_repository, product_repository
from storefront.infrastructure.cli.identity import with_caller


@click.command("toggle")
@click.option("--product", "product_id", required=True, help="Product ID.")
@with_caller
def favorite_toggle(caller: Caller, product_id: str) -> None:
    """Add a product to favorites, or remove it if already there."""
    handler = ToggleFavoriteHandler(
        favorites_repo=favorites_repository(),
        product_repo=product_repository(),
    )

    try:
        now_favorite = handler.handle(caller, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if now_favorite:
        click.echo(f"Added {product_id} to favorites.")
    else:
        click.echo(f"Removed {product_id} from favorites.")


@click.command("list")
@with_caller
def favorite_list(caller: Caller) -> None:
    """List favorite products."""
    handler = ListFavoritesHandler(
        favorites_repo=favorites_repository(),
        product_repo=product_repository(),
    )

    try:
        products = handler.handle(caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No favorites yet.")
        return

    for p in products:
        click.echo(f"{p.id:<34} {p.name:<20} {p.price:>10}")


@click.command("check")
@click.option("--product", "product_id", required=True, help="Product ID.")
@with_caller
def favorite_check(caller: Caller, product_id: str) -> None:
    """Tell whether a product is among the favorites."""
    try:
        is_favorite = IsFavoriteHandler(favorites_repository()).handle(caller, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if is_favorite:
        click.echo(f"{product_id} is a favorite.")
    else:
        click.echo(f"{product_id} is not a favorite.")

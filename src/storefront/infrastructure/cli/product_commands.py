"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.show_product import ListProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import ProductPatch, ProductSpec
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import product_repository, settings
from storefront.infrastructure.cli.identity import with_caller


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = ListProductsHandler(product_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 73)
    for p in products:
        click.echo(f"{p.id:<34} {p.name:<20} {p.price:>10} {p.stock:>6}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    try:
        p = ShowProductHandler(product_repository()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{p.name}  ({p.id})")
    click.echo(f"Price: {p.price}   Stock: {p.stock}")
    if p.image_ref:
        click.echo(f"Image: {p.image_ref}")
    if p.description:
        click.echo()
        click.echo(p.description)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.99).")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--image", "image_ref", default=None, help="Image reference.")
@with_caller
def product_add(
    caller: Caller,
    name: str,
    price: str,
    stock: int,
    description: str,
    image_ref: str | None,
) -> None:
    """Add a new product to the catalog (admin)."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        spec = ProductSpec(
            name=name,
            price=Money.of(price),
            description=description,
            image_ref=image_ref,
            stock=stock,
        )
        product = handler.handle(caller, spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--description", default=None, help="New description.")
@click.option("--image", "image_ref", default=None, help="New image reference.")
@click.option("--clear-image", is_flag=True, default=False, help="Remove the image.")
@with_caller
def product_update(
    caller: Caller,
    product_id: str,
    name: str | None,
    price: str | None,
    stock: int | None,
    description: str | None,
    image_ref: str | None,
    clear_image: bool,
) -> None:
    """Edit a product (admin)."""
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        max_attempts=settings().update_retries,
    )

    try:
        patch = ProductPatch(
            name=name,
            price=Money.of(price) if price is not None else None,
            description=description,
            image_ref=image_ref,
            stock=stock,
            clear_image=clear_image,
        )
        product = handler.handle(caller, product_id, patch)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: {product.name} at {product.price}, stock {product.stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@with_caller
def product_delete(caller: Caller, product_id: str) -> None:
    """Remove a product from the catalog (admin)."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        max_attempts=settings().update_retries,
    )

    try:
        handler.handle(caller, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")

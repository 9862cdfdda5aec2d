"""CLI commands for checkout and the order ledger."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException, InsufficientStockError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.identity import with_caller

_STATUS_CHOICES = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


def _display_summary(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    click.echo(
        f"{'Order':<34} {'Created':<21} {'Status':<10} {'Items':>5} {'Total':>10}"
    )
    click.echo("-" * 84)
    for dto in orders:
        click.echo(
            f"{dto.id:<34} {dto.created_at:<21} {dto.status:<10} "
            f"{dto.unit_count:>5} {dto.total:>10}"
        )


@click.command("place")
@click.option(
    "--idempotency-key",
    default=None,
    help="Client token; retrying with the same key returns the same order.",
)
@with_caller
def order_place(caller: Caller, idempotency_key: str | None) -> None:
    """Check out the cart into a new order."""
    handler = PlaceOrderHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
    )

    try:
        dto = handler.handle(caller, idempotency_key=idempotency_key)
    except InsufficientStockError as exc:
        raise click.ClickException(
            f"Not enough stock for product {exc.product_id} "
            f"(requested {exc.requested}, {exc.available} left). "
            "Adjust that cart line and try again."
        )
    except DomainException as exc:
        hint = " (temporary, please retry)" if exc.retriable else ""
        raise click.ClickException(f"{exc}{hint}")

    _display_order(dto)


@click.command("list")
@click.option("--for-user", "for_user", default=None, help="Another user's ID (admin).")
@with_caller
def order_list(caller: Caller, for_user: str | None) -> None:
    """List orders, newest first."""
    try:
        orders = ListOrdersHandler(order_repository()).handle(caller, for_user)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("all")
@click.option("--status", type=_STATUS_CHOICES, default=None, help="Only this status.")
@with_caller
def order_all(caller: Caller, status: str | None) -> None:
    """List every order in the store (admin)."""
    wanted = OrderStatus(status.upper()) if status else None
    try:
        orders = ListAllOrdersHandler(order_repository()).handle(caller, wanted)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@with_caller
def order_show(caller: Caller, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(order_repository()).handle(caller, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICES, help="New status.")
@with_caller
def order_status(caller: Caller, order_id: str, new_status: str) -> None:
    """Move an order along its lifecycle (admin).

    Cancelling returns the order's units to stock.
    """
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(caller, order_id, OrderStatus(new_status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")

"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    price: str  # formatted, e.g. "$9.99"
    description: str
    image_ref: str | None
    stock: int

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            description=product.description,
            image_ref=product.image_ref,
            stock=product.stock,
        )


@dataclass(frozen=True)
class CartLineDTO:
    """A cart line joined with live catalog data.

    ``available`` is False when the product has been removed from the
    catalog; such lines carry no price and are left out of the total.
    """

    product_id: str
    quantity: int
    available: bool
    product_name: str | None = None
    unit_price: str | None = None
    line_total: str | None = None
    in_stock: bool = False


@dataclass(frozen=True)
class CartDTO:

    user_id: str
    lines: list[CartLineDTO]
    total: str  # advisory; checkout re-prices from the catalog


@dataclass(frozen=True)
class OrderLineDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    image_ref: str | None


@dataclass(frozen=True)
class OrderDTO:

    id: str
    user_id: str
    status: str
    lines: list[OrderLineDTO]
    total: str
    unit_count: int
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            lines=[
                OrderLineDTO(
                    product_id=line.product_id,
                    product_name=line.name_snapshot,
                    quantity=line.quantity.value,
                    unit_price=str(line.price_snapshot),
                    line_total=str(line.subtotal),
                    image_ref=line.image_snapshot,
                )
                for line in order.lines
            ],
            total=str(order.total_amount),
            unit_count=order.unit_count,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )

"""Application service: Show Cart use case (query).

Joins the active cart lines with live catalog data.  The total is
advisory only; checkout re-reads prices at the moment stock is taken.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.model.cart import CartLine
from storefront.domain.model.identity import Caller
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


def active_lines(cart_repo: CartRepository, user_id: str) -> list[CartLine]:
    return [line for line in cart_repo.list_lines(user_id) if line.active]


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller) -> CartDTO:
        total = Money.zero()
        lines: list[CartLineDTO] = []

        for line in active_lines(self._cart_repo, caller.user_id):
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                lines.append(
                    CartLineDTO(
                        product_id=line.product_id,
                        quantity=line.quantity.value,
                        available=False,
                    )
                )
                continue

            line_total = product.price * line.quantity.value
            total = total + line_total
            lines.append(
                CartLineDTO(
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                    available=True,
                    product_name=product.name,
                    unit_price=str(product.price),
                    line_total=str(line_total),
                    in_stock=product.stock >= line.quantity.value,
                )
            )

        return CartDTO(user_id=caller.user_id, lines=lines, total=str(total))

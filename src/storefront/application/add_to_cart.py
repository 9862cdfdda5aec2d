"""Application service: Add To Cart use case.

Upserts a line in the caller's own cart.  Quantities are clamped, not
rejected, and stock is not consulted: the cart is only a
staging area and checkout is the single place stock is enforced.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.identity import Caller
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, product_id: str, quantity: int = 1) -> CartLine:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        line = self._cart_repo.get_line(caller.user_id, product_id)
        if line is None:
            line = CartLine.new(product_id, quantity)
        else:
            line.set_quantity(quantity)

        self._cart_repo.save_line(caller.user_id, line)
        return line

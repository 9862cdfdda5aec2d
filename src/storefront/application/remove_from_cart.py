"""Application service: Remove From Cart use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.repository.cart_repository import CartRepository


class RemoveFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller, product_id: str) -> None:
        line = self._cart_repo.get_line(caller.user_id, product_id)
        if line is None or not line.active:
            raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")

        line.deactivate()
        self._cart_repo.save_line(caller.user_id, line)

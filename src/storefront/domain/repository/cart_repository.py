"""Abstract repository for per-user carts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def get_line(self, user_id: str, product_id: str) -> CartLine | None:
        """Return one line (active or not), or None."""

    @abstractmethod
    def list_lines(self, user_id: str) -> list[CartLine]:
        """Return every line of the user's cart, including inactive ones."""

    @abstractmethod
    def save_line(self, user_id: str, line: CartLine) -> None:
        """Upsert a single line."""

    @abstractmethod
    def clear(self, user_id: str) -> None:
        """Drop every line of the user's cart."""

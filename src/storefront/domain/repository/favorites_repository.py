"""Abstract repository for per-user favorite sets."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FavoritesRepository(ABC):

    @abstractmethod
    def contains(self, user_id: str, product_id: str) -> bool:
        """True if the product is in the user's favorites."""

    @abstractmethod
    def list_product_ids(self, user_id: str) -> list[str]:
        """Return the user's favorite product IDs in insertion order."""

    @abstractmethod
    def toggle(self, user_id: str, product_id: str) -> bool:
        """Flip membership as one step and return the new state."""

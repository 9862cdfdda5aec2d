"""Application service: Toggle Favorite use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.repository.favorites_repository import FavoritesRepository
from storefront.domain.repository.product_repository import ProductRepository


class ToggleFavoriteHandler:

    def __init__(
        self,
        favorites_repo: FavoritesRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._favorites_repo = favorites_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, product_id: str) -> bool:
        """Flip the product in the caller's favorites; returns the new state.

        Un-favoriting a product that has since been deleted is allowed,
        favoriting one is not.
        """
        if not self._favorites_repo.contains(caller.user_id, product_id):
            if self._product_repo.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return self._favorites_repo.toggle(caller.user_id, product_id)

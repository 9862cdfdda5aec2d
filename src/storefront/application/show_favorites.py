"""Application service: favorites queries."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.model.identity import Caller
from storefront.domain.repository.favorites_repository import FavoritesRepository
from storefront.domain.repository.product_repository import ProductRepository


class ListFavoritesHandler:
    """The caller's favorite products; deleted products are left out."""

    def __init__(
        self,
        favorites_repo: FavoritesRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._favorites_repo = favorites_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller) -> list[ProductDTO]:
        result: list[ProductDTO] = []
        for product_id in self._favorites_repo.list_product_ids(caller.user_id):
            product = self._product_repo.get_by_id(product_id)
            if product is not None:
                result.append(ProductDTO.from_domain(product))
        return result


class IsFavoriteHandler:

    def __init__(self, favorites_repo: FavoritesRepository) -> None:
        self._favorites_repo = favorites_repo

    def handle(self, caller: Caller, product_id: str) -> bool:
        return self._favorites_repo.contains(caller.user_id, product_id)

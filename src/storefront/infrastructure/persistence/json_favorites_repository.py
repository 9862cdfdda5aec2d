"""JSON-file-backed implementation of FavoritesRepository.

Layout: ``{user_id: [product_id, ...]}``.
"""

from __future__ import annotations

from pathlib import Path

from storefront.domain.repository.favorites_repository import FavoritesRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonFavoritesRepository(FavoritesRepository):

    def __init__(self, file_path: Path, timeout: float = 2.0) -> None:
        self._file = JsonFile(file_path, empty={}, timeout=timeout)

    def contains(self, user_id: str, product_id: str) -> bool:
        return product_id in self.list_product_ids(user_id)

    def list_product_ids(self, user_id: str) -> list[str]:
        with self._file.locked():
            return list(self._file.load().get(user_id, []))

    def toggle(self, user_id: str, product_id: str) -> bool:
        with self._file.locked():
            favorites = self._file.load()
            ids = favorites.setdefault(user_id, [])
            if product_id in ids:
                ids.remove(product_id)
                now_favorite = False
            else:
                ids.append(product_id)
                now_favorite = True
            if not ids:
                del favorites[user_id]
            self._file.persist(favorites)
        return now_favorite

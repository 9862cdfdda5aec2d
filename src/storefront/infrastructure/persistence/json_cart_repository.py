"""JSON-file-backed implementation of CartRepository.

Layout: ``{user_id: [line, ...]}``.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, timeout: float = 2.0) -> None:
        self._file = JsonFile(file_path, empty={}, timeout=timeout)

    # --- CartRepository interface ---------------------------------------------

    def get_line(self, user_id: str, product_id: str) -> CartLine | None:
        for line in self.list_lines(user_id):
            if line.product_id == product_id:
                return line
        return None

    def list_lines(self, user_id: str) -> list[CartLine]:
        with self._file.locked():
            raw_lines = self._file.load().get(user_id, [])
        return [self._to_domain(raw) for raw in raw_lines]

    def save_line(self, user_id: str, line: CartLine) -> None:
        with self._file.locked():
            carts = self._file.load()
            raw_lines = carts.setdefault(user_id, [])
            for i, raw in enumerate(raw_lines):
                if raw["product_id"] == line.product_id:
                    raw_lines[i] = self._to_raw(line)
                    break
            else:
                raw_lines.append(self._to_raw(line))
            self._file.persist(carts)

    def clear(self, user_id: str) -> None:
        with self._file.locked():
            carts = self._file.load()
            if carts.pop(user_id, None) is not None:
                self._file.persist(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "product_id": line.product_id,
            "quantity": line.quantity.value,
            "active": line.active,
            "updated_at": line.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
            active=raw.get("active", True),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

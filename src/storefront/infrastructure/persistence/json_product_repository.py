"""JSON-file-backed implementation of ProductRepository.

Stock operations and versioned saves each run as a single
read-check-write under the file lock, which is what makes
``decrement_stock`` an atomic compare-and-decrement.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, timeout: float = 2.0) -> None:
        self._file = JsonFile(file_path, empty=[], timeout=timeout)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        product = self.get_including_deleted(product_id)
        if product is None or product.deleted:
            return None
        return product

    def get_including_deleted(self, product_id: str) -> Product | None:
        with self._file.locked():
            return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        with self._file.locked():
            products = self._load().values()
        return sorted(
            (p for p in products if not p.deleted),
            key=lambda p: (p.name.lower(), p.id),
        )

    def add(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            if product.id in products:
                raise ValidationError(f"Product ID '{product.id}' already exists")
            product.version = 1
            products[product.id] = product
            self._persist(products)

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            stored = products.get(product.id)
            if stored is None:
                raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
            if stored.version != product.version:
                raise ConcurrentModificationError(
                    f"Product '{product.id}' was modified concurrently "
                    f"(expected version {product.version}, found {stored.version})"
                )
            product.version += 1
            products[product.id] = product
            self._persist(products)

    def decrement_stock(self, product_id: str, amount: int) -> Product:
        with self._file.locked():
            products = self._load()
            product = products.get(product_id)
            if product is None or product.deleted:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.take_stock(amount)
            product.version += 1
            self._persist(products)
        logger.debug("Took %d of %s, %d left", amount, product_id, product.stock)
        return product

    def increment_stock(self, product_id: str, amount: int) -> Product:
        with self._file.locked():
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.return_stock(amount)
            product.version += 1
            self._persist(products)
        logger.debug("Returned %d to %s, now %d", amount, product_id, product.stock)
        return product

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "description": product.description,
            "image_ref": product.image_ref,
            "stock": product.stock,
            "version": product.version,
            "deleted": product.deleted,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            description=raw.get("description", ""),
            image_ref=raw.get("image_ref"),
            stock=raw.get("stock", 0),
            version=raw.get("version", 0),
            deleted=raw.get("deleted", False),
        )

"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in
the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a live product by its ID, or None if absent or deleted."""

    @abstractmethod
    def get_including_deleted(self, product_id: str) -> Product | None:
        """Return a product even if it has been soft-deleted."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every live product, ordered by name."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a brand-new product; fails if the ID is taken."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist an edited product.

        Conditional on ``product.version`` still matching the stored
        version; raises ConcurrentModificationError otherwise.  On
        success the product's version is bumped in place.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, amount: int) -> Product:
        """Atomically take *amount* units from a live product's stock.

        The check and the write happen as one step relative to every
        other stock operation on the same product.  Returns the product
        as it stands after the decrement.

        Raises EntityNotFoundError or InsufficientStockError.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, amount: int) -> Product:
        """Atomically return *amount* units; works on deleted products too."""

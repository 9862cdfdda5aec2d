"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: admins add, edit and remove them, and checkout draws down
their stock.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductSpec:
    """Input for creating a product."""

    name: str
    price: Money
    description: str = ""
    image_ref: str | None = None
    stock: int = 0


@dataclass(frozen=True)
class ProductPatch:
    """Partial update; ``None`` means leave the field unchanged.

    ``clear_image`` drops the image reference, since ``None`` cannot
    express that on its own.
    """

    name: str | None = None
    price: Money | None = None
    description: str | None = None
    image_ref: str | None = None
    stock: int | None = None
    clear_image: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            self.name is None
            and self.price is None
            and self.description is None
            and self.image_ref is None
            and self.stock is None
            and not self.clear_image
        )


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``name`` is never blank
    - ``stock`` is never negative

    ``version`` is bumped by the repository on every persisted write and
    is what makes read-patch-save updates detectable as stale.
    """

    id: str
    name: str
    price: Money
    description: str = ""
    image_ref: str | None = None
    stock: int = 0
    version: int = 0
    deleted: bool = False

    @staticmethod
    def create(product_id: str, spec: ProductSpec) -> Product:
        product = Product(id=product_id, name="", price=spec.price)
        product.rename(spec.name)
        product.set_stock(spec.stock)
        product.description = spec.description.strip()
        product.image_ref = spec.image_ref or None
        return product

    # --- Admin edits ----------------------------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders keep the price they snapshotted at checkout.
        """
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError("Stock must be a whole number of units")
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity

    def apply(self, patch: ProductPatch) -> None:
        if patch.name is not None:
            self.rename(patch.name)
        if patch.price is not None:
            self.update_price(patch.price)
        if patch.description is not None:
            self.description = patch.description.strip()
        if patch.clear_image:
            self.image_ref = None
        elif patch.image_ref is not None:
            self.image_ref = patch.image_ref
        if patch.stock is not None:
            self.set_stock(patch.stock)

    def mark_deleted(self) -> None:
        if self.deleted:
            raise ValidationError(f"Product '{self.id}' is already deleted")
        self.deleted = True

    # --- Stock movements ------------------------------------------------------

    def take_stock(self, amount: int) -> None:
        """Remove *amount* units, refusing to go below zero."""
        if amount <= 0:
            raise ValidationError("Stock decrement must be positive")
        if amount > self.stock:
            raise InsufficientStockError(self.id, requested=amount, available=self.stock)
        self.stock -= amount

    def return_stock(self, amount: int) -> None:
        """Put *amount* units back (compensation or cancellation)."""
        if amount <= 0:
            raise ValidationError("Stock increment must be positive")
        self.stock += amount

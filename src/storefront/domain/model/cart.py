"""CartLine — a staged intent to buy, owned by one user.

Carts are advisory: nothing here looks at stock.  Removed lines are
kept with ``active=False`` so that late or reordered client writes
cannot resurrect a line the user already dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.value_objects import Quantity


@dataclass
class CartLine:

    product_id: str
    quantity: Quantity
    active: bool = True
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def new(product_id: str, quantity: int) -> CartLine:
        return CartLine(product_id=product_id, quantity=Quantity.clamped(quantity))

    def set_quantity(self, quantity: int) -> None:
        """Set the desired quantity, clamped to the allowed range.

        Setting a quantity on a removed line brings it back.
        """
        self.quantity = Quantity.clamped(quantity)
        self.active = True
        self._touch()

    def deactivate(self) -> None:
        self.active = False
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

"""Order aggregate — the immutable record of a checkout.

An Order owns its line snapshots.  Once placed, the only permitted
mutation is a status transition along the fulfillment lifecycle.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PLACED = "PLACED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# Allowed forward moves.  Nothing ever returns to PLACED; DELIVERED and
# CANCELLED are terminal.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLine:
    """Captures product name, price and image at checkout time.

    Frozen: later catalog edits never reach an existing order.
    """

    product_id: str
    name_snapshot: str
    price_snapshot: Money
    quantity: Quantity
    image_snapshot: str | None = None

    @staticmethod
    def snapshot(product: Product, quantity: Quantity) -> OrderLine:
        return OrderLine(
            product_id=product.id,
            name_snapshot=product.name,
            price_snapshot=product.price,
            quantity=quantity,
            image_snapshot=product.image_ref,
        )

    @property
    def subtotal(self) -> Money:
        return self.price_snapshot * self.quantity.value


def _sum_lines(lines: list[OrderLine]) -> Money:
    result = Money.zero()
    for line in lines:
        result = result + line.subtotal
    return result


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders — it computes and stores the
    total.  ``__init__`` stays simple so the repository can reconstitute
    persisted orders; ``verify_total()`` guards that path.
    """

    id: str
    user_id: str
    lines: tuple[OrderLine, ...]
    total_amount: Money
    status: OrderStatus = OrderStatus.PLACED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    idempotency_key: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        user_id: str,
        lines: list[OrderLine],
        idempotency_key: str | None = None,
    ) -> Order:
        if not user_id:
            raise ValidationError("Order must belong to a user")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        product_ids = [line.product_id for line in lines]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("Order lines must reference distinct products")

        return Order(
            id=uuid.uuid4().hex,
            user_id=user_id,
            lines=tuple(lines),
            total_amount=_sum_lines(lines),
            idempotency_key=idempotency_key,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in _TRANSITIONS[self.status]

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move along the lifecycle graph.

        Stock restoration for cancellations is coordinated by the
        application handler *before* calling this.
        """
        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(
                f"Cannot move order {self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)

    # --- Consistency ----------------------------------------------------------

    def verify_total(self) -> None:
        expected = _sum_lines(list(self.lines))
        if expected != self.total_amount:
            raise ValidationError(
                f"Order {self.id} total {self.total_amount} does not match "
                f"its lines ({expected})"
            )

    @property
    def unit_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

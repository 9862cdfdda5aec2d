"""Domain service: Stock Reservation.

Coordinates the cross-aggregate stock movements of checkout and
cancellation.  It lives in the domain layer because the rules are core
business rules, not just orchestration.

Reservation is a compensating sequence rather than a transaction:
each decrement is its own atomic step in the product store, and if a
later step fails every decrement already applied in the same attempt
is given back before the error propagates.  Partial stock commitment
is never left behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reservation:
    """A cart line whose stock has been taken, with the product state seen
    by that decrement."""

    line: CartLine
    product: Product


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve_lines(self, lines: list[CartLine]) -> list[Reservation]:
        """Take stock for every line, all or nothing.

        Lines are processed in ascending product ID so concurrent
        checkouts over overlapping products always contend in the same
        order.  Lines whose product no longer exists are skipped.
        """
        reservations: list[Reservation] = []

        for line in sorted(lines, key=lambda ln: ln.product_id):
            try:
                product = self._product_repo.decrement_stock(
                    line.product_id, line.quantity.value
                )
            except EntityNotFoundError:
                logger.warning(
                    "Skipping cart line for missing product %s", line.product_id
                )
                continue
            except DomainException as exc:
                logger.warning(
                    "Stock reservation failed on product %s (%s); rolling back %d line(s)",
                    line.product_id,
                    type(exc).__name__,
                    len(reservations),
                )
                self.release(reservations)
                raise
            reservations.append(Reservation(line=line, product=product))

        return reservations

    def release(self, reservations: list[Reservation]) -> None:
        """Give back stock for reservations, newest first."""
        for reservation in reversed(reservations):
            self._give_back(
                reservation.line.product_id, reservation.line.quantity.value
            )

    def release_for_order(self, order: Order) -> None:
        """Return exactly the quantities of an order being cancelled.

        If one increment fails the ones already applied are taken back
        again, so a retried cancellation cannot restock a line twice.
        """
        restored: list[tuple[str, int]] = []
        for line in order.lines:
            try:
                self._product_repo.increment_stock(
                    line.product_id, line.quantity.value
                )
            except DomainException:
                logger.warning(
                    "Restock for order %s failed on product %s; undoing %d line(s)",
                    order.id,
                    line.product_id,
                    len(restored),
                )
                for product_id, amount in reversed(restored):
                    self._take_back(product_id, amount)
                raise
            restored.append((line.product_id, line.quantity.value))

    def _take_back(self, product_id: str, amount: int) -> None:
        try:
            self._product_repo.decrement_stock(product_id, amount)
        except EntityNotFoundError:
            # Soft-deleted since the order was placed; nothing live to adjust.
            logger.error(
                "Cannot undo restock of %d on deleted product %s", amount, product_id
            )
        except DomainException:
            logger.exception(
                "Undoing restock of %d on product %s failed; "
                "stock needs manual reconciliation",
                amount,
                product_id,
            )

    def _give_back(self, product_id: str, amount: int) -> None:
        try:
            self._product_repo.increment_stock(product_id, amount)
        except DomainException:
            # Keep compensating the other lines; the caller still gets the
            # original failure.
            logger.exception(
                "Compensating increment of %d on product %s failed; "
                "stock needs manual reconciliation",
                amount,
                product_id,
            )

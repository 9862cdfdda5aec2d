"""Application service: Update Order Status use case.

Admin/fulfillment moves an order along PLACED -> SHIPPED -> DELIVERED,
or PLACED -> CANCELLED.  The status write is conditional on the status
that was read, so of two overlapping updates only one can win.

A cancellation claims the CANCELLED status first and only then gives
the order's units back to the catalog.  If the restock fails the claim
is reverted to PLACED, so a retry restocks exactly once.
"""

from __future__ import annotations

import dataclasses
import logging

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidTransitionError,
)
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, order_id: str, new_status: OrderStatus) -> OrderDTO:
        caller.require_admin()

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        if not order.can_transition_to(new_status):
            raise InvalidTransitionError(
                f"Cannot move order {order.id} from {order.status.value} "
                f"to {new_status.value}"
            )

        before = dataclasses.replace(order)
        order.transition_to(new_status)
        self._order_repo.save_status(order, expected_status=before.status)

        if new_status is OrderStatus.CANCELLED:
            try:
                StockReservationService(self._product_repo).release_for_order(order)
            except DomainException:
                logger.warning(
                    "Restock for cancelled order %s failed; reverting to %s",
                    order.id,
                    before.status.value,
                )
                self._revert(before, order)
                raise

        logger.info(
            "Order %s moved %s -> %s by %s",
            order.id,
            before.status.value,
            new_status.value,
            caller.user_id,
        )
        return OrderDTO.from_domain(order)

    def _revert(self, before: Order, claimed: Order) -> None:
        try:
            self._order_repo.save_status(before, expected_status=claimed.status)
        except DomainException:
            logger.exception(
                "Reverting order %s to %s failed; order needs manual reconciliation",
                before.id,
                before.status.value,
            )

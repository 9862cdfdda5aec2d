"""Application service: Place Order use case (checkout).

Moves the caller's cart into a placed order as one logical unit across
three independent stores:

1. Replay: an order already placed with the same idempotency key is
   returned as-is, so client retries never charge twice.
2. Read the active cart lines; an empty cart is an error.
3. Take stock line by line (ascending product ID) through the stock
   reservation service.  Lines whose product was deleted are skipped.
   Any failure gives back what was already taken and propagates.
4. Snapshot name/price/image from the product state each decrement
   returned, and append the order.  If that write fails the stock is
   given back as well.  If it lost to an overlapping request with the
   same idempotency key, the order that request placed is returned.
5. Clear the cart.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO
from storefront.application.show_cart import active_lines
from storefront.domain.exceptions import (
    DomainException,
    DuplicateIdempotencyKeyError,
    EmptyCartError,
)
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, caller: Caller, idempotency_key: str | None = None) -> OrderDTO:
        user_id = caller.user_id

        if idempotency_key:
            replayed = self._replay(user_id, idempotency_key)
            if replayed is not None:
                return replayed

        lines = active_lines(self._cart_repo, user_id)
        if not lines:
            raise EmptyCartError("Cart is empty")

        svc = StockReservationService(self._product_repo)
        reservations = svc.reserve_lines(lines)
        if not reservations:
            raise EmptyCartError("None of the products in the cart are available")

        try:
            order = Order.place(
                user_id=user_id,
                lines=[
                    OrderLine.snapshot(r.product, r.line.quantity)
                    for r in reservations
                ],
                idempotency_key=idempotency_key or None,
            )
            self._order_repo.append(order)
        except DuplicateIdempotencyKeyError:
            # An overlapping request with the same key got there first.
            svc.release(reservations)
            replayed = self._replay(user_id, idempotency_key)
            if replayed is None:
                raise
            return replayed
        except DomainException:
            logger.warning(
                "Order write failed for %s; returning stock for %d line(s)",
                user_id,
                len(reservations),
            )
            svc.release(reservations)
            raise

        self._cart_repo.clear(user_id)

        logger.info(
            "Order %s placed for %s: %d line(s), total %s",
            order.id,
            user_id,
            len(order.lines),
            order.total_amount,
        )
        return OrderDTO.from_domain(order)

    def _replay(self, user_id: str, idempotency_key: str) -> OrderDTO | None:
        previous = self._order_repo.find_by_idempotency_key(user_id, idempotency_key)
        if previous is None:
            return None
        logger.info(
            "Replaying order %s for %s (key %s)", previous.id, user_id, idempotency_key
        )
        # A retry may follow a checkout that failed only at the final cart clear.
        self._cart_repo.clear(user_id)
        return OrderDTO.from_domain(previous)

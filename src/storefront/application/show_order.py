"""Application service: order queries."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        caller.require_owner_or_admin(order.user_id)
        return OrderDTO.from_domain(order)


class ListOrdersHandler:
    """A user's order history, newest first.

    Admins may pass another user's ID; everyone else only sees their own.
    """

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, user_id: str | None = None) -> list[OrderDTO]:
        owner = user_id or caller.user_id
        caller.require_owner_or_admin(owner)
        return [OrderDTO.from_domain(o) for o in self._order_repo.list_for_user(owner)]


class ListAllOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, status: OrderStatus | None = None) -> list[OrderDTO]:
        caller.require_admin()
        orders = self._order_repo.list_all()
        if status is not None:
            orders = [o for o in orders if o.status is status]
        return [OrderDTO.from_domain(o) for o in orders]

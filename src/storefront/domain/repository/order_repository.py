"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_by_idempotency_key(self, user_id: str, key: str) -> Order | None:
        """Return the user's order placed with *key*, if any."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def append(self, order: Order) -> None:
        """Write a new order once; fails if the ID already exists.

        Raises ``DuplicateIdempotencyKeyError`` if the user already has an
        order with the same idempotency key.
        """

    @abstractmethod
    def save_status(self, order: Order, expected_status: OrderStatus) -> None:
        """Persist the status fields of an existing order.

        The write only happens if the stored status is still
        *expected_status*; otherwise ``ConcurrentModificationError``.
        """

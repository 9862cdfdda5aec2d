"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateIdempotencyKeyError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path, timeout: float = 2.0) -> None:
        self._file = JsonFile(file_path, empty=[], timeout=timeout)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_idempotency_key(self, user_id: str, key: str) -> Order | None:
        for raw in self._load_raw():
            if raw["user_id"] == user_id and raw.get("idempotency_key") == key:
                return self._to_domain(raw)
        return None

    def list_for_user(self, user_id: str) -> list[Order]:
        return _newest_first(
            [self._to_domain(raw) for raw in self._load_raw() if raw["user_id"] == user_id]
        )

    def list_all(self) -> list[Order]:
        return _newest_first([self._to_domain(raw) for raw in self._load_raw()])

    def append(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()
            for raw in orders:
                if raw["id"] == order.id:
                    raise ValidationError(f"Order {order.id} already exists")
                if (
                    order.idempotency_key
                    and raw["user_id"] == order.user_id
                    and raw.get("idempotency_key") == order.idempotency_key
                ):
                    raise DuplicateIdempotencyKeyError(order.user_id, order.idempotency_key)
            orders.append(self._to_raw(order))
            self._file.persist(orders)

    def save_status(self, order: Order, expected_status: OrderStatus) -> None:
        with self._file.locked():
            orders = self._file.load()
            for raw in orders:
                if raw["id"] == order.id:
                    if raw["status"] != expected_status.value:
                        raise ConcurrentModificationError(
                            f"Order {order.id} is {raw['status']}, expected "
                            f"{expected_status.value}"
                        )
                    raw["status"] = order.status.value
                    raw["updated_at"] = (
                        order.updated_at.isoformat() if order.updated_at else None
                    )
                    break
            else:
                raise EntityNotFoundError(f"Order {order.id} not found")
            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        with self._file.locked():
            return self._file.load()

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat() if order.updated_at else None,
            "idempotency_key": order.idempotency_key,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "lines": [
                {
                    "product_id": line.product_id,
                    "name": line.name_snapshot,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.price_snapshot.amount),
                    "currency": line.price_snapshot.currency,
                    "image_ref": line.image_snapshot,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = tuple(
            OrderLine(
                product_id=i["product_id"],
                name_snapshot=i["name"],
                price_snapshot=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                quantity=Quantity(i["quantity"]),
                image_snapshot=i.get("image_ref"),
            )
            for i in raw["lines"]
        )
        order = Order(
            id=raw["id"],
            user_id=raw["user_id"],
            lines=lines,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=(
                datetime.fromisoformat(raw["updated_at"]) if raw.get("updated_at") else None
            ),
            idempotency_key=raw.get("idempotency_key"),
        )
        order.verify_total()
        return order

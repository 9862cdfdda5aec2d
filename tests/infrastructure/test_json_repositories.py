"""Tests for the JSON-file repositories, against a real temp directory."""

import json
import threading
from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateIdempotencyKeyError,
    EntityNotFoundError,
    InsufficientStockError,
    StoreTimeoutError,
    ValidationError,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_favorites_repository import (
    JsonFavoritesRepository,
)
from storefront.infrastructure.persistence.json_file import JsonFile
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@pytest.fixture
def product_repo(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json", timeout=1.0)
    repo.add(Product(id="p1", name="Mug", price=Money.of("9.99"), stock=10))
    repo.add(Product(id="p2", name="Tee", price=Money.of("15.00"), stock=1))
    return repo


def _order(user_id="alice", key=None, qty=2):
    product = Product(id="p1", name="Mug", price=Money.of("9.99"), image_ref="mug.png")
    return Order.place(
        user_id=user_id,
        lines=[OrderLine.snapshot(product, Quantity(qty))],
        idempotency_key=key,
    )


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "nested" / "products.json")
        assert json.loads((tmp_path / "nested" / "products.json").read_text()) == []

    def test_round_trip(self, product_repo):
        mug = product_repo.get_by_id("p1")
        assert mug.name == "Mug"
        assert mug.price == Money.of("9.99")
        assert mug.version == 1
        assert mug.deleted is False

    def test_duplicate_id_rejected(self, product_repo):
        with pytest.raises(ValidationError):
            product_repo.add(Product(id="p1", name="Other", price=Money.of("1")))

    def test_stale_save_rejected(self, product_repo):
        first = product_repo.get_by_id("p1")
        second = product_repo.get_by_id("p1")
        first.rename("Cup")
        product_repo.save(first)

        second.rename("Beaker")
        with pytest.raises(ConcurrentModificationError):
            product_repo.save(second)
        assert product_repo.get_by_id("p1").name == "Cup"

    def test_decrement_refuses_to_go_negative(self, product_repo):
        with pytest.raises(InsufficientStockError):
            product_repo.decrement_stock("p2", 2)
        assert product_repo.get_by_id("p2").stock == 1

    def test_decrement_returns_current_state(self, product_repo):
        product = product_repo.decrement_stock("p1", 3)
        assert product.stock == 7
        assert product_repo.get_by_id("p1").stock == 7

    def test_deleted_product_cannot_be_decremented(self, product_repo):
        tee = product_repo.get_by_id("p2")
        tee.mark_deleted()
        product_repo.save(tee)

        with pytest.raises(EntityNotFoundError):
            product_repo.decrement_stock("p2", 1)
        assert product_repo.increment_stock("p2", 1).stock == 2
        assert [p.id for p in product_repo.list_all()] == ["p1"]

    def test_concurrent_decrements_never_oversell(self, product_repo):
        sold: list[int] = []
        barrier = threading.Barrier(15)

        def buy() -> None:
            barrier.wait()
            try:
                product_repo.decrement_stock("p1", 1)
                sold.append(1)
            except InsufficientStockError:
                pass

        threads = [threading.Thread(target=buy) for _ in range(15)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(sold) == 10
        assert product_repo.get_by_id("p1").stock == 0

    def test_separate_instances_share_the_lock(self, tmp_path, product_repo):
        other = JsonProductRepository(tmp_path / "products.json", timeout=1.0)
        other.decrement_stock("p1", 4)
        assert product_repo.get_by_id("p1").stock == 6

    def test_lock_wait_is_bounded(self, tmp_path, product_repo):
        impatient = JsonProductRepository(tmp_path / "products.json", timeout=0.05)
        holder = JsonFile(tmp_path / "products.json", empty=[], timeout=1.0)

        with holder.locked():
            with pytest.raises(StoreTimeoutError) as exc_info:
                impatient.decrement_stock("p1", 1)

        assert exc_info.value.retriable
        assert product_repo.get_by_id("p1").stock == 10


class TestJsonCartRepository:

    def test_save_and_update_line(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        line = CartLine.new("p1", 2)
        repo.save_line("alice", line)
        line.set_quantity(4)
        repo.save_line("alice", line)

        lines = repo.list_lines("alice")
        assert len(lines) == 1
        assert lines[0].quantity.value == 4
        assert lines[0].updated_at.tzinfo is not None

    def test_inactive_lines_are_kept(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        line = CartLine.new("p1", 1)
        line.deactivate()
        repo.save_line("alice", line)

        assert repo.get_line("alice", "p1").active is False

    def test_clear_only_touches_one_user(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        repo.save_line("alice", CartLine.new("p1", 1))
        repo.save_line("bob", CartLine.new("p1", 1))

        repo.clear("alice")
        repo.clear("nobody")

        assert repo.list_lines("alice") == []
        assert len(repo.list_lines("bob")) == 1


class TestJsonOrderRepository:

    def test_round_trip_keeps_snapshots(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order(key="k1")
        repo.append(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.total_amount == Money.of("19.98")
        assert loaded.lines[0].name_snapshot == "Mug"
        assert loaded.lines[0].image_snapshot == "mug.png"
        assert loaded.idempotency_key == "k1"
        assert loaded.created_at.tzinfo is not None

    def test_find_by_idempotency_key(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order(key="k1")
        repo.append(order)

        assert repo.find_by_idempotency_key("alice", "k1").id == order.id
        assert repo.find_by_idempotency_key("bob", "k1") is None

    def test_reused_key_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.append(_order(key="k1"))

        with pytest.raises(DuplicateIdempotencyKeyError):
            repo.append(_order(key="k1"))
        assert len(repo.list_all()) == 1

    def test_status_update(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.append(order)

        order.transition_to(OrderStatus.SHIPPED)
        repo.save_status(order, expected_status=OrderStatus.PLACED)

        loaded = repo.get_by_id(order.id)
        assert loaded.status is OrderStatus.SHIPPED
        assert loaded.updated_at is not None

    def test_stale_status_write_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.append(order)
        shipped = repo.get_by_id(order.id)
        cancelled = repo.get_by_id(order.id)

        shipped.transition_to(OrderStatus.SHIPPED)
        repo.save_status(shipped, expected_status=OrderStatus.PLACED)

        cancelled.transition_to(OrderStatus.CANCELLED)
        with pytest.raises(ConcurrentModificationError):
            repo.save_status(cancelled, expected_status=OrderStatus.PLACED)
        assert repo.get_by_id(order.id).status is OrderStatus.SHIPPED

    def test_status_update_of_unknown_order(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        with pytest.raises(EntityNotFoundError):
            repo.save_status(_order(), expected_status=OrderStatus.PLACED)

    def test_lists_newest_first(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        older = _order()
        older.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        newer = _order()
        repo.append(older)
        repo.append(newer)
        repo.append(_order(user_id="bob"))

        assert [o.id for o in repo.list_for_user("alice")] == [newer.id, older.id]
        assert len(repo.list_all()) == 3

    def test_tampered_total_is_detected(self, tmp_path):
        path = tmp_path / "orders.json"
        repo = JsonOrderRepository(path)
        order = _order()
        repo.append(order)

        raw = json.loads(path.read_text())
        raw[0]["total_amount"] = "1.00"
        path.write_text(json.dumps(raw))

        with pytest.raises(ValidationError):
            repo.get_by_id(order.id)


class TestJsonFavoritesRepository:

    def test_toggle(self, tmp_path):
        repo = JsonFavoritesRepository(tmp_path / "favorites.json")

        assert repo.toggle("alice", "p1") is True
        assert repo.contains("alice", "p1")
        assert repo.toggle("alice", "p1") is False
        assert repo.list_product_ids("alice") == []
        assert json.loads((tmp_path / "favorites.json").read_text()) == {}

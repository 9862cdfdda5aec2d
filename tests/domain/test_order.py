"""Unit tests for the Order aggregate and its lifecycle."""

from dataclasses import FrozenInstanceError

import pytest

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


def _line(product_id: str = "p1", qty: int = 1, price: str = "9.99") -> OrderLine:
    return OrderLine(
        product_id=product_id,
        name_snapshot=f"Product {product_id}",
        price_snapshot=Money.of(price),
        quantity=Quantity(qty),
    )


class TestOrderPlace:

    def test_total_is_sum_of_line_subtotals(self):
        order = Order.place("alice", [_line("p1", 3, "9.99"), _line("p2", 2, "0.01")])
        assert order.total_amount == Money.of("29.99")
        assert order.status is OrderStatus.PLACED
        assert order.unit_count == 5

    def test_ids_are_unique(self):
        a = Order.place("alice", [_line()])
        b = Order.place("alice", [_line()])
        assert a.id != b.id

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            Order.place("alice", [])

    def test_duplicate_products_rejected(self):
        with pytest.raises(ValidationError, match="distinct"):
            Order.place("alice", [_line("p1"), _line("p1")])


class TestOrderLineSnapshot:

    def test_snapshot_copies_catalog_fields(self):
        product = Product(
            id="p1", name="Mug", price=Money.of("9.99"), image_ref="img/mug.png", stock=3
        )
        line = OrderLine.snapshot(product, Quantity(2))
        assert line.name_snapshot == "Mug"
        assert line.image_snapshot == "img/mug.png"
        assert line.subtotal == Money.of("19.98")

    def test_snapshot_unaffected_by_later_edits(self):
        product = Product(id="p1", name="Mug", price=Money.of("9.99"))
        line = OrderLine.snapshot(product, Quantity(1))
        product.rename("Big Mug")
        product.update_price(Money.of("19.99"))
        assert line.name_snapshot == "Mug"
        assert line.price_snapshot == Money.of("9.99")

    def test_line_is_immutable(self):
        line = _line()
        with pytest.raises(FrozenInstanceError):
            line.quantity = Quantity(5)


class TestOrderTransitions:

    @pytest.mark.parametrize(
        "path",
        [
            [OrderStatus.SHIPPED],
            [OrderStatus.SHIPPED, OrderStatus.DELIVERED],
            [OrderStatus.CANCELLED],
        ],
    )
    def test_allowed_paths(self, path):
        order = Order.place("alice", [_line()])
        for status in path:
            order.transition_to(status)
        assert order.status is path[-1]
        assert order.updated_at is not None

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PLACED, OrderStatus.DELIVERED),
            (OrderStatus.PLACED, OrderStatus.PLACED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.PLACED),
            (OrderStatus.DELIVERED, OrderStatus.PLACED),
            (OrderStatus.CANCELLED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.SHIPPED),
        ],
    )
    def test_forbidden_transitions(self, start, target):
        order = Order.place("alice", [_line()])
        order.status = start
        with pytest.raises(InvalidTransitionError):
            order.transition_to(target)
        assert order.status is start


class TestOrderTotalIntegrity:

    def test_verify_total_accepts_consistent_order(self):
        Order.place("alice", [_line("p1", 2), _line("p2", 1)]).verify_total()

    def test_verify_total_detects_drift(self):
        order = Order.place("alice", [_line("p1", 2, "5.00")])
        order.total_amount = Money.of("9.00")
        with pytest.raises(ValidationError, match="does not match"):
            order.verify_total()

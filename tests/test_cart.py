"""Unit tests for the cart ledger.

Run with: pytest tests/test_cart.py -v
"""

from decimal import Decimal

import pytest

from garage.cart import MAX_QUANTITY, CartLedger, CartState, coerce_quantity
from garage.models import CartTotals


class TestAddItem:
    """Tests for CartLedger.add_item."""

    def test_first_add_creates_entry(self, cart, focus):
        """A new product is appended with the given quantity."""
        assert cart.add_item(focus, 2) is True
        (entry,) = cart.snapshot()
        assert entry.product == focus
        assert entry.quantity == 2

    def test_repeat_adds_accumulate(self, cart, focus):
        """Quantities for the same product add up in a single entry."""
        for qty in (1, 4, 2, 3):
            cart.add_item(focus, qty)
        snapshot = cart.snapshot()
        assert len(snapshot) == 1
        assert snapshot[0].quantity == 10

    def test_keeps_first_add_order(self, cart, focus, hilux):
        """Merging does not move an entry to the end."""
        cart.add_item(focus, 1)
        cart.add_item(hilux, 1)
        cart.add_item(focus, 1)
        assert [e.code for e in cart.snapshot()] == [7, 12]

    @pytest.mark.parametrize("qty", [0, -3, 1.5, "abc", "", "+-2", "--1", "\u00b2", None, True, Decimal("2"), 10**24])
    def test_invalid_quantity_is_a_no_op(self, cart, focus, qty):
        """Bad quantities leave the cart exactly as it was."""
        cart.add_item(focus, 1)
        before = cart.snapshot()

        assert cart.add_item(focus, qty) is False
        assert cart.snapshot() == before

    def test_numeric_strings_are_accepted(self, cart, focus):
        """A quantity typed into a form field is parsed."""
        cart.add_item(focus, " 3 ")
        cart.add_item(focus, 2.0)
        assert cart.snapshot()[0].quantity == 5


    def test_merge_past_limit_is_ignored(self, cart, focus):
        """An add that would push an entry over MAX_QUANTITY changes nothing."""
        cart.add_item(focus, MAX_QUANTITY)
        assert cart.add_item(focus, 1) is False
        assert cart.snapshot()[0].quantity == MAX_QUANTITY
        assert cart.totals().total_amount == Decimal("15000.00") * MAX_QUANTITY


class TestTotals:
    """Tests for CartLedger.totals."""

    def test_empty_cart(self, cart):
        """An empty cart totals zero."""
        assert cart.totals() == CartTotals(total_items=0, total_amount=Decimal(0))

    def test_totals_follow_every_mutation(self, cart, focus, hilux):
        """Totals are recomputed right after each add."""
        cart.add_item(focus, 2)
        assert cart.totals() == CartTotals(2, Decimal("30000.00"))

        cart.add_item(hilux, 3)
        cart.add_item(focus, 1)
        totals = cart.totals()
        assert totals.total_items == 6
        assert totals.total_amount == Decimal("15000.00") * 3 + Decimal("32500.50") * 3
        assert totals.total_amount == sum(e.subtotal for e in cart.snapshot())


class TestSnapshotAndClear:
    """Tests for snapshot isolation, clear and cart state."""

    def test_snapshot_is_detached(self, cart, focus, hilux):
        """Later adds do not show up in an earlier snapshot."""
        cart.add_item(focus, 1)
        snapshot = cart.snapshot()

        cart.add_item(focus, 5)
        cart.add_item(hilux, 1)

        assert len(snapshot) == 1
        assert snapshot[0].quantity == 1

    def test_clear_resets_everything(self, cart, focus):
        """After clear the cart is empty and totals are zero."""
        cart.add_item(focus, 2)
        cart.clear()
        assert cart.snapshot() == ()
        assert cart.totals() == CartTotals(0, Decimal(0))

    def test_state_machine(self, cart, focus):
        """EMPTY until the first successful add, back to EMPTY on clear."""
        assert cart.state is CartState.EMPTY
        assert not cart.checkout_enabled

        cart.add_item(focus, 0)
        assert cart.state is CartState.EMPTY

        cart.add_item(focus, 1)
        assert cart.state is CartState.NON_EMPTY
        assert cart.checkout_enabled

        cart.clear()
        assert cart.state is CartState.EMPTY


class TestCoerceQuantity:
    """Tests for coerce_quantity."""

    def test_values(self):
        """Only positive whole numbers survive."""
        assert coerce_quantity(4) == 4
        assert coerce_quantity("+2") == 2
        assert coerce_quantity("-2") is None
        assert coerce_quantity(3.0) == 3
        assert coerce_quantity(False) is None
        assert coerce_quantity(MAX_QUANTITY) == MAX_QUANTITY
        assert coerce_quantity(MAX_QUANTITY + 1) is None

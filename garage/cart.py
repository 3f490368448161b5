import logging
import re
from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import Any

from .models import CartEntry, CartTotals, ProductRecord

logger = logging.getLogger(__name__)

# upper bound for one entry's quantity
MAX_QUANTITY = 999_999


class CartState(Enum):
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


def compute_totals(entries: Iterable[CartEntry]) -> CartTotals:
    """Sum quantities and exact subtotals; shared by the cart and the invoice."""
    total_items = 0
    total_amount = Decimal(0)
    for entry in entries:
        total_items += entry.quantity
        total_amount += entry.subtotal
    return CartTotals(total_items=total_items, total_amount=total_amount)


def coerce_quantity(value: Any) -> int | None:
    """Return ``value`` as a positive int, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        if not re.fullmatch(r"[+-]?\d+", value.strip(), re.ASCII):
            return None
        value = int(value)
    elif not isinstance(value, int):
        return None
    return value if 0 < value <= MAX_QUANTITY else None


class CartLedger:
    """Cart entries for one shopping session, one entry per product code."""

    def __init__(self) -> None:
        # dict keeps first-add order; merging replaces the value in place
        self._entries: dict[int, CartEntry] = {}

    def add_item(self, product: ProductRecord, quantity: Any) -> bool:
        qty = coerce_quantity(quantity)
        if qty is None:
            logger.debug("Ignoring quantity %r for product %s", quantity, product.code)
            return False

        existing = self._entries.get(product.code)
        if existing is not None and existing.quantity + qty > MAX_QUANTITY:
            logger.debug("Ignoring quantity %r for product %s: over the limit", quantity, product.code)
            return False

        if existing is None:
            self._entries[product.code] = CartEntry(product=product, quantity=qty)
        else:
            self._entries[product.code] = replace(existing, quantity=existing.quantity + qty)
        return True

    def totals(self) -> CartTotals:
        return compute_totals(self._entries.values())

    def snapshot(self) -> tuple[CartEntry, ...]:
        return tuple(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    @property
    def state(self) -> CartState:
        return CartState.NON_EMPTY if self._entries else CartState.EMPTY

    @property
    def checkout_enabled(self) -> bool:
        return self.state is CartState.NON_EMPTY

    def __len__(self) -> int:
        return len(self._entries)

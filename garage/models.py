"""Domain models for catalog and cart state.

Plain frozen dataclasses; nothing here knows about HTTP or MCP.
"""

import re
from dataclasses import dataclass
from decimal import Decimal

_EMOTICONS = re.compile("[\U0001F600-\U0001F64F]")


@dataclass(frozen=True)
class ProductRecord:
    """A vehicle as published by the catalog source."""

    code: int
    brand: str
    model: str
    category: str
    type: str
    image_ref: str
    sale_price: Decimal

    def __post_init__(self) -> None:
        if self.sale_price < 0:
            raise ValueError("Sale price cannot be negative")

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"

    @property
    def display_tag(self) -> str:
        return _EMOTICONS.sub("", self.type).strip()


@dataclass(frozen=True)
class CartEntry:
    """A product snapshot and how many units of it are in the cart."""

    product: ProductRecord
    quantity: int

    @property
    def code(self) -> int:
        return self.product.code

    @property
    def subtotal(self) -> Decimal:
        return self.product.sale_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    total_items: int
    total_amount: Decimal

from garage.cart import CartLedger, CartState
from garage.catalog import CatalogStore
from garage.invoice import InvoiceDocument, InvoiceGenerator
from garage.models import CartEntry, CartTotals, ProductRecord
from garage.pricing import format_price
from garage.session import ShopSession

__all__ = [
    "CartLedger",
    "CartState",
    "CatalogStore",
    "InvoiceDocument",
    "InvoiceGenerator",
    "CartEntry",
    "CartTotals",
    "ProductRecord",
    "format_price",
    "ShopSession",
]

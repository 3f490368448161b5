"""The shop session: owned catalog, cart and invoice state plus the
commands the HTTP and MCP layers call."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from . import config
from .cart import CartLedger
from .catalog import CatalogStore, source_from_location
from .checkout import PaymentForm, validate_payment
from .errors import EmptyCartError, ProductNotFoundError
from .invoice import DocumentSink, FileDocumentSink, InvoiceDocument, InvoiceGenerator
from .models import ProductRecord
from .pricing import format_price
from .result import Err

logger = logging.getLogger(__name__)


def product_to_dict(product: ProductRecord) -> dict[str, Any]:
    return {
        "code": product.code,
        "brand": product.brand,
        "model": product.model,
        "category": product.category,
        "type": product.type,
        "tag": product.display_tag,
        "imageRef": product.image_ref,
        "salePrice": str(product.sale_price),
        "salePriceFormatted": format_price(product.sale_price),
    }


class ShopSession:
    def __init__(
        self,
        catalog: CatalogStore,
        cart: CartLedger | None = None,
        invoices: InvoiceGenerator | None = None,
        sink: DocumentSink | None = None,
    ) -> None:
        self.catalog = catalog
        self.cart = cart if cart is not None else CartLedger()
        self.invoices = invoices if invoices is not None else InvoiceGenerator()
        self.sink = sink if sink is not None else FileDocumentSink(config.INVOICE_DIR)

    @classmethod
    def from_config(cls) -> "ShopSession":
        source = source_from_location(config.CATALOG_URL, timeout=config.CATALOG_TIMEOUT)
        return cls(CatalogStore(source))

    def reset(self) -> None:
        self.cart.clear()

    # ---------------------------------------------------
    # Catalog
    # ---------------------------------------------------
    async def load_catalog(self) -> dict[str, Any]:
        result = await self.catalog.load()
        if isinstance(result, Err):
            return {
                "success": False,
                "error": result.error.code.value,
                "message": result.error.message,
                "count": 0,
            }
        return {
            "success": True,
            "message": f"{len(result.value)} vehicles loaded",
            "count": len(result.value),
        }

    def search(self, query: str | None = "") -> dict[str, Any]:
        if not self.catalog.is_loaded:
            error = self.catalog.last_error
            return {
                "products": [],
                "count": 0,
                "state": "unavailable",
                "message": error.message if error else "The catalog has not been loaded yet.",
            }

        results = self.catalog.search(query)
        if not results:
            return {
                "products": [],
                "count": 0,
                "state": "no_results",
                "message": "No vehicles matched your search.",
            }

        return {
            "products": [product_to_dict(p) for p in results],
            "count": len(results),
            "state": "ok",
            "message": f"{len(results)} vehicles found",
        }

    # ---------------------------------------------------
    # Cart
    # ---------------------------------------------------
    def cart_summary(self) -> dict[str, Any]:
        items = []
        for entry in self.cart.snapshot():
            items.append({
                "code": entry.code,
                "name": entry.product.display_name,
                "imageRef": entry.product.image_ref,
                "quantity": entry.quantity,
                "unitPrice": str(entry.product.sale_price),
                "unitPriceFormatted": format_price(entry.product.sale_price),
                "subtotal": str(entry.subtotal),
                "subtotalFormatted": format_price(entry.subtotal),
            })

        totals = self.cart.totals()
        return {
            "items": items,
            "totalAmount": str(totals.total_amount),
            "totalAmountFormatted": format_price(totals.total_amount),
            "totalQuantity": totals.total_items,
        }

    def add_to_cart(self, product_code: int, quantity: Any = 1) -> dict[str, Any]:
        """Add a product to the cart.

        Raises:
            ProductNotFoundError: If the code is not in the loaded catalog.
        """
        product = self.catalog.get(product_code)
        if product is None:
            raise ProductNotFoundError(product_code)

        added = self.cart.add_item(product, quantity)
        return {
            "success": True,
            "added": added,
            "message": f"{product.display_name} added to cart" if added else "Nothing was added",
            "cart": self.cart_summary(),
        }

    def view_cart(self) -> dict[str, Any]:
        summary = self.cart_summary()
        if not self.cart.checkout_enabled:
            return {
                "isEmpty": True,
                "checkoutEnabled": False,
                "message": "Your cart is empty.",
                "cart": summary,
            }

        return {
            "isEmpty": False,
            "checkoutEnabled": True,
            "message": f"{summary['totalQuantity']} items in your cart",
            "cart": summary,
        }

    # ---------------------------------------------------
    # Checkout
    # ---------------------------------------------------
    def create_invoice(self, customer_name: str | None, timestamp: datetime | None = None) -> InvoiceDocument:
        """Generate the invoice for the current cart and hand it to the sink.

        The cart is left as is.
        """
        document = self.invoices.generate(
            self.cart.snapshot(),
            customer_name,
            timestamp or datetime.now(),
        )
        self.sink.save(document.filename, document)
        logger.info("Invoice %s emitted for %d items", document.filename, len(document.lines))
        return document

    def checkout(
        self,
        payment: Mapping[str, Any] | PaymentForm,
        timestamp: datetime | None = None,
    ) -> dict[str, Any]:
        """Validate payment, emit the invoice, then clear the cart.

        Raises:
            EmptyCartError: If there is nothing to check out.
            ValidationError: If the payment form is incomplete.
        """
        if not self.cart.checkout_enabled:
            raise EmptyCartError()

        form = validate_payment(payment)
        document = self.create_invoice(form.customer_name, timestamp)
        self.cart.clear()

        return {
            "success": True,
            "message": f"Payment processed. Total: {document.total_text}",
            "invoice": document.to_dict(),
        }

"""Invoice rendering and the sinks that receive finished invoices."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from .cart import compute_totals
from .config import DEFAULT_CUSTOMER, INVOICE_DATE_FORMAT, STORE_NAME
from .models import CartEntry
from .pricing import format_price

logger = logging.getLogger(__name__)

PAGE_WIDTH = 64
DESCRIPTION_WIDTH = 34
QUANTITY_WIDTH = 10
SUBTOTAL_WIDTH = PAGE_WIDTH - DESCRIPTION_WIDTH - QUANTITY_WIDTH

CLOSING_MESSAGE = "Thank you for your purchase!"


@dataclass(frozen=True)
class InvoiceLine:
    description: str
    quantity: int
    subtotal: Decimal

    @property
    def subtotal_text(self) -> str:
        return format_price(self.subtotal)


@dataclass(frozen=True)
class InvoiceDocument:
    """A finished invoice. Holds copies of everything it prints."""

    title: str
    customer_name: str
    issued_at: datetime
    date_text: str
    lines: tuple[InvoiceLine, ...]
    total: Decimal
    closing: str
    filename: str

    @property
    def total_text(self) -> str:
        return format_price(self.total)

    def render(self) -> str:
        rule = "-" * PAGE_WIDTH
        customer = f"Customer: {self.customer_name}"
        date = f"Date: {self.date_text}"

        out = [
            self.title.center(PAGE_WIDTH).rstrip(),
            "",
            customer + date.rjust(max(PAGE_WIDTH - len(customer), len(date) + 1)),
            "",
            _row("Make/Model", "Quantity", "Subtotal"),
            rule,
        ]
        out.extend(_row(line.description, str(line.quantity), line.subtotal_text) for line in self.lines)
        out.append(rule)
        out.append(_row("Total:", "", self.total_text))
        out.append("")
        out.append(self.closing.center(PAGE_WIDTH).rstrip())
        return "\n".join(out) + "\n"

    def to_bytes(self) -> bytes:
        return self.render().encode("utf-8")

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "customerName": self.customer_name,
            "date": self.date_text,
            "items": [
                {
                    "description": line.description,
                    "quantity": line.quantity,
                    "subtotal": str(line.subtotal),
                    "subtotalFormatted": line.subtotal_text,
                }
                for line in self.lines
            ],
            "total": str(self.total),
            "totalFormatted": self.total_text,
            "filename": self.filename,
            "content": self.render(),
        }


def _row(description: str, quantity: str, subtotal: str) -> str:
    return (
        description.ljust(DESCRIPTION_WIDTH)
        + quantity.rjust(QUANTITY_WIDTH)
        + subtotal.rjust(SUBTOTAL_WIDTH)
    )


def invoice_filename(customer_name: str, store_name: str = STORE_NAME) -> str:
    safe = re.sub(r"[\s/\\]", "_", customer_name)
    return f"Invoice-{store_name}-{safe}.txt"


class InvoiceGenerator:
    def __init__(
        self,
        store_name: str = STORE_NAME,
        default_customer: str = DEFAULT_CUSTOMER,
        date_format: str = INVOICE_DATE_FORMAT,
        closing: str = CLOSING_MESSAGE,
    ) -> None:
        self.store_name = store_name
        self.default_customer = default_customer
        self.date_format = date_format
        self.closing = closing

    def generate(
        self,
        snapshot: Sequence[CartEntry],
        customer_name: str | None,
        timestamp: datetime,
    ) -> InvoiceDocument:
        """Build an invoice from a cart snapshot. Never touches the cart."""
        name = (customer_name or "").strip() or self.default_customer
        entries = tuple(snapshot)
        lines = tuple(
            InvoiceLine(
                description=entry.product.display_name,
                quantity=entry.quantity,
                subtotal=entry.subtotal,
            )
            for entry in entries
        )

        return InvoiceDocument(
            title=f"Purchase Invoice - {self.store_name}",
            customer_name=name,
            issued_at=timestamp,
            date_text=timestamp.strftime(self.date_format),
            lines=lines,
            total=compute_totals(entries).total_amount,
            closing=self.closing,
            filename=invoice_filename(name, self.store_name),
        )


# ============================================================
# Sinks
# ============================================================

class DocumentSink(ABC):
    """Receives finished invoices and delivers them somewhere."""

    @abstractmethod
    def save(self, filename: str, document: InvoiceDocument) -> None:
        ...


class FileDocumentSink(DocumentSink):
    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def save(self, filename: str, document: InvoiceDocument) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_bytes(document.to_bytes())
        logger.info("Invoice written to %s", path)


class MemoryDocumentSink(DocumentSink):
    def __init__(self) -> None:
        self.documents: dict[str, InvoiceDocument] = {}

    def save(self, filename: str, document: InvoiceDocument) -> None:
        self.documents[filename] = document

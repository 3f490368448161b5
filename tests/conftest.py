"""Pytest configuration and shared fixtures."""

import asyncio
from decimal import Decimal

import pytest

from garage.cart import CartLedger
from garage.catalog import CatalogStore, StaticCatalogSource
from garage.invoice import InvoiceGenerator, MemoryDocumentSink
from garage.models import ProductRecord
from garage.session import ShopSession

RECORDS = [
    {
        "code": 7,
        "brand": "Ford",
        "model": "Focus",
        "category": "Sedan",
        "type": "Family \U0001F600",
        "imageRef": "https://img.example/focus.jpg",
        "salePrice": 15000.00,
    },
    {
        "code": 12,
        "brand": "Toyota",
        "model": "Hilux",
        "category": "Pickup",
        "type": "Work",
        "imageRef": "https://img.example/hilux.jpg",
        "salePrice": 32500.50,
    },
    {
        "code": 21,
        "brand": "Mazda",
        "model": "MX-5",
        "category": "Convertible",
        "type": "Sport",
        "imageRef": "https://img.example/mx5.jpg",
        "salePrice": 28999.99,
    },
]


@pytest.fixture
def records() -> list[dict]:
    return [dict(r) for r in RECORDS]


@pytest.fixture
def focus() -> ProductRecord:
    return ProductRecord(
        code=7,
        brand="Ford",
        model="Focus",
        category="Sedan",
        type="Family",
        image_ref="",
        sale_price=Decimal("15000.00"),
    )


@pytest.fixture
def hilux() -> ProductRecord:
    return ProductRecord(
        code=12,
        brand="Toyota",
        model="Hilux",
        category="Pickup",
        type="Work",
        image_ref="",
        sale_price=Decimal("32500.50"),
    )


@pytest.fixture
def cart() -> CartLedger:
    return CartLedger()


@pytest.fixture
def catalog(records) -> CatalogStore:
    store = CatalogStore(StaticCatalogSource(records))
    asyncio.run(store.load())
    return store


@pytest.fixture
def sink() -> MemoryDocumentSink:
    return MemoryDocumentSink()


@pytest.fixture
def shop(catalog, sink) -> ShopSession:
    return ShopSession(catalog, invoices=InvoiceGenerator(), sink=sink)


@pytest.fixture
def payment() -> dict:
    return {
        "customerName": "Ana",
        "cardNumber": "4111 1111 1111 1111",
        "expiry": "12/29",
        "cvv": "123",
    }

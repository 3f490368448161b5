"""Catalog sources and the in-memory catalog store."""

import json
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import httpx

from .errors import CatalogError, FetchError, ParseError
from .models import ProductRecord
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

# field -> accepted payload keys; the Spanish ones come from the original data.json
FIELD_KEYS = {
    "code": ("code", "codigo"),
    "brand": ("brand", "marca"),
    "model": ("model", "modelo"),
    "category": ("category", "categoria"),
    "type": ("type", "tipo"),
    "image_ref": ("imageRef", "imagen"),
    "sale_price": ("salePrice", "precio_venta"),
}
REQUIRED_TEXT = ("brand", "model", "category")
OPTIONAL_TEXT = ("type", "image_ref")


# ============================================================
# Sources
# ============================================================

class CatalogSource(ABC):
    """Anything that can hand back the raw catalog payload."""

    @abstractmethod
    async def fetch(self) -> Any:
        """Return the decoded payload.

        Raises:
            FetchError: If the source cannot be reached.
            ParseError: If the payload is not valid JSON.
        """
        ...


class HttpCatalogSource(CatalogSource):
    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> Any:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(self.url)
            except httpx.HTTPError as exc:
                raise FetchError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise FetchError(f"HTTP error: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc


class FileCatalogSource(CatalogSource):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def fetch(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"{self.path} is not UTF-8: {exc}") from exc
        except OSError as exc:
            raise FetchError(f"Cannot read {self.path}: {exc}") from exc

        try:
            return json.loads(text)
        except ValueError as exc:
            raise ParseError(f"Invalid JSON in {self.path}: {exc}") from exc


class StaticCatalogSource(CatalogSource):
    """Embedded fixture, handy for demos and tests."""

    def __init__(self, records: Iterable[Mapping[str, Any]]) -> None:
        self._records = [dict(r) for r in records]

    async def fetch(self) -> Any:
        return [dict(r) for r in self._records]


def source_from_location(location: str, timeout: float | None = None) -> CatalogSource:
    if location.startswith(("http://", "https://")):
        return HttpCatalogSource(location, timeout=timeout)
    return FileCatalogSource(location)


# ============================================================
# Payload parsing
# ============================================================

def _pick(record: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_KEYS[field]:
        if key in record:
            return record[key]
    return None


def _parse_code(value: Any, index: int) -> int:
    if isinstance(value, bool):
        raise ParseError(f"Record {index}: code must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"\d+", value.strip(), re.ASCII):
        return int(value.strip())
    raise ParseError(f"Record {index}: code must be an integer")


def _parse_price(value: Any, index: int) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ParseError(f"Record {index}: salePrice must be a number")
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise ParseError(f"Record {index}: salePrice must be a number") from exc
    if not price.is_finite() or price < 0:
        raise ParseError(f"Record {index}: salePrice must be a non-negative number")
    return price


def parse_product(record: Any, index: int = 0) -> ProductRecord:
    if not isinstance(record, Mapping):
        raise ParseError(f"Record {index}: expected an object")

    fields: dict[str, Any] = {
        "code": _parse_code(_pick(record, "code"), index),
        "sale_price": _parse_price(_pick(record, "sale_price"), index),
    }
    for name in REQUIRED_TEXT:
        value = _pick(record, name)
        if not isinstance(value, str):
            raise ParseError(f"Record {index}: {name} must be a string")
        fields[name] = value
    for name in OPTIONAL_TEXT:
        value = _pick(record, name)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ParseError(f"Record {index}: {name} must be a string")
        fields[name] = value

    return ProductRecord(**fields)


def parse_products(payload: Any) -> tuple[ProductRecord, ...]:
    """Turn a decoded catalog payload into product records.

    Raises:
        ParseError: If the payload is not a list of product objects or two
            records share a code.
    """
    if not isinstance(payload, list):
        raise ParseError("Catalog payload must be a list of products")

    products = []
    seen: set[int] = set()
    for index, record in enumerate(payload):
        product = parse_product(record, index)
        if product.code in seen:
            raise ParseError(f"Record {index}: duplicate code {product.code}")
        seen.add(product.code)
        products.append(product)
    return tuple(products)


# ============================================================
# Store
# ============================================================

class CatalogStore:
    """Holds the catalog loaded from one source.

    Only ``load()`` changes the contents. Calling ``load()`` again while a
    previous call is still pending is not supported; callers serialize it.
    """

    def __init__(self, source: CatalogSource) -> None:
        self._source = source
        self._products: tuple[ProductRecord, ...] = ()
        self._loaded = False
        self.last_error: CatalogError | None = None

    @property
    def products(self) -> tuple[ProductRecord, ...]:
        return self._products

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load(self) -> Result[tuple[ProductRecord, ...], CatalogError]:
        try:
            payload = await self._source.fetch()
            products = parse_products(payload)
        except CatalogError as exc:
            self._products = ()
            self._loaded = False
            self.last_error = exc
            logger.error("Catalog load failed: %s (%s)", exc, exc.detail)
            return Err(exc)

        self._products = products
        self._loaded = True
        self.last_error = None
        logger.info("Catalog loaded with %d products", len(products))
        return Ok(products)

    def search(self, query: str | None = "") -> tuple[ProductRecord, ...]:
        if not query:
            return self._products
        q = query.lower()
        return tuple(
            p for p in self._products
            if q in p.brand.lower() or q in p.model.lower() or q in p.category.lower()
        )

    def get(self, code: int) -> ProductRecord | None:
        return next((p for p in self._products if p.code == code), None)

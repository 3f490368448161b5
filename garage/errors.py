"""Domain error codes for the shop."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    CATALOG_UNAVAILABLE = "CATALOG_UNAVAILABLE"
    CATALOG_MALFORMED = "CATALOG_MALFORMED"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    EMPTY_CART = "EMPTY_CART"
    INVALID_PAYMENT = "INVALID_PAYMENT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class CatalogError(DomainError):
    """Base class for catalog load failures."""

    def __init__(self, code: ErrorCode, message: str, detail: str = "") -> None:
        super().__init__(code=code, message=message)
        self.detail = detail


class FetchError(CatalogError):
    """Raised when the catalog source is unreachable or answers with an error status."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            ErrorCode.CATALOG_UNAVAILABLE,
            "Could not load the products. Please try again later.",
            detail,
        )


class ParseError(CatalogError):
    """Raised when the catalog payload does not have the expected shape."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            ErrorCode.CATALOG_MALFORMED,
            "The product catalog is malformed.",
            detail,
        )


class ProductNotFoundError(DomainError):
    """Raised when a product code is not in the catalog."""

    def __init__(self, product_code: int) -> None:
        super().__init__(
            code=ErrorCode.PRODUCT_NOT_FOUND,
            message="Product not found",
        )
        self.product_code = product_code


class EmptyCartError(DomainError):
    """Raised when checkout is requested with nothing in the cart."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_CART,
            message="The cart is empty, nothing to check out",
        )


class ValidationError(DomainError):
    """Raised when required payment form fields are missing or invalid."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAYMENT,
            message="Please fill in: " + ", ".join(fields),
        )
        self.fields = fields

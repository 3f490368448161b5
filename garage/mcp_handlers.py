from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import DomainError
from .session import ShopSession


def _failure(exc: DomainError) -> dict:
    return {"success": False, "error": exc.code.value, "message": exc.message}


def register_mcp(mcp: FastMCP, shop: ShopSession):
    """MCP tool registration"""

    @mcp.tool()
    async def search_products(query: str = "") -> dict:
        """Search the vehicle catalog by brand, model or category"""
        return shop.search(query)

    @mcp.tool()
    async def reload_catalog() -> dict:
        """Fetch the vehicle catalog again"""
        return await shop.load_catalog()

    @mcp.tool()
    async def add_to_cart(productCode: int, quantity: Any = 1) -> dict:
        """Add units of a vehicle to the cart"""
        try:
            return shop.add_to_cart(productCode, quantity)
        except DomainError as exc:
            return _failure(exc)

    @mcp.tool()
    async def get_cart() -> dict:
        """Show the cart"""
        return shop.view_cart()

    @mcp.tool()
    async def checkout(
        cardNumber: str,
        expiry: str,
        cvv: str,
        customerName: str = "",
    ) -> dict:
        """Confirm payment, issue the invoice and empty the cart"""
        payment: dict[str, Any] = {
            "customerName": customerName,
            "cardNumber": cardNumber,
            "expiry": expiry,
            "cvv": cvv,
        }
        try:
            return shop.checkout(payment)
        except DomainError as exc:
            return _failure(exc)

from typing import Any

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .errors import DomainError, ErrorCode
from .session import ShopSession

STATUS_BY_CODE = {
    ErrorCode.PRODUCT_NOT_FOUND: 404,
    ErrorCode.EMPTY_CART: 409,
    ErrorCode.INVALID_PAYMENT: 422,
    ErrorCode.CATALOG_UNAVAILABLE: 503,
    ErrorCode.CATALOG_MALFORMED: 503,
}


class AddToCartRequest(BaseModel):
    productCode: int
    # passed through untouched: the cart decides what counts as a quantity
    quantity: Any = 1


def register_api_routes(app: FastAPI, shop: ShopSession) -> None:

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        body = {"success": False, "error": exc.code.value, "message": exc.message}
        fields = getattr(exc, "fields", None)
        if fields:
            body["fields"] = fields
        return JSONResponse(status_code=STATUS_BY_CODE.get(exc.code, 400), content=body)

    router = APIRouter(prefix="/api", tags=["garage"])

    # 1) Product search
    @router.get("/products")
    async def search_products_endpoint(query: str = Query("", description="Search text")):
        return shop.search(query)

    # 2) Catalog reload
    @router.post("/catalog/reload")
    async def reload_catalog_endpoint():
        result = await shop.load_catalog()
        if not result["success"]:
            return JSONResponse(status_code=503, content=result)
        return result

    # 3) Add to cart
    @router.post("/cart/add")
    async def add_to_cart_endpoint(body: AddToCartRequest):
        return shop.add_to_cart(body.productCode, body.quantity)

    # 4) View cart
    @router.get("/cart")
    async def get_cart_endpoint():
        return shop.view_cart()

    # 5) Payment and invoice
    @router.post("/checkout")
    async def checkout_endpoint(request: Request):
        try:
            payment = await request.json()
        except ValueError:
            payment = {}
        if not isinstance(payment, dict):
            payment = {}
        return shop.checkout(payment)

    app.include_router(router)

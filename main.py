from contextlib import asynccontextmanager

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from garage import config
from garage.mcp_handlers import register_mcp
from garage.routes import register_api_routes
from garage.session import ShopSession


def create_app(shop: ShopSession | None = None) -> FastAPI:
    shop = shop if shop is not None else ShopSession.from_config()

    # =====================================================
    # 1) Catalog is fetched once at startup
    # =====================================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await shop.load_catalog()
        yield
        shop.reset()

    # =====================================================
    # 2) FastAPI app
    # =====================================================
    app = FastAPI(title="GarageOnline", lifespan=lifespan)
    app.state.shop = shop

    # =====================================================
    # 3) MCP Server
    # =====================================================
    mcp = FastMCP(name="garage-mcp")
    register_mcp(mcp, shop)
    app.state.mcp = mcp
    app.mount("/mcp", mcp.sse_app())

    # =====================================================
    # 4) API routes
    # =====================================================
    register_api_routes(app, shop)

    @app.get("/mcp-info")
    async def mcp_info_handler():
        """MCP server info"""
        return {
            "name": "garage-mcp",
            "version": "1.0.0",
            "protocols": ["sse"],
            "endpoints": {
                "sse": "/mcp/sse",
                "messages": "/mcp/messages/",
            },
        }

    return app


config.configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)

# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# IMPORT WSZYSTKICH MODELI PRZED create_all
import storefront.data.models  # noqa: F401
from storefront.api.routers import (
    auth,
    carts,
    customers,
    health,
    inventory_alerts,
    orders,
    products,
    reviews,
    sellers,
    wishlist,
)
from storefront.data.database import Base, engine
from storefront.data.seed import seed
from storefront.domain.errors import StorefrontError
from storefront.utils.retry import db_retry
from storefront.utils.settings import SEED_DEMO_DATA
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@db_retry()
def init_db(bind=None):
    bind = bind or engine
    logger.info(f"Creating tables: {sorted(Base.metadata.tables)}")
    Base.metadata.create_all(bind=bind)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if SEED_DEMO_DATA:
        seed()
    yield


async def storefront_error_handler(request: Request, exc: StorefrontError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "type": type(exc).__name__},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": "InternalError"},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(customers.router)
    app.include_router(sellers.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)
    app.include_router(inventory_alerts.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

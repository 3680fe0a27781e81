# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.exception_handlers import register_exception_handlers
from storefront.api.routers import (
    health,
    customers,
    categories,
    products,
    suppliers,
    stores,
    carts,
    orders,
    payments,
    shipping,
    inventory,
    reviews,
    promotions,
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(customers.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(suppliers.router)
    app.include_router(stores.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(payments.router)
    app.include_router(shipping.router)
    app.include_router(inventory.router)
    app.include_router(reviews.router)
    app.include_router(promotions.router)

    register_exception_handlers(app)

    return app

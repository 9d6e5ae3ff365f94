"""Storefront HTTP API.

``create_app`` assembles the FastAPI application: routers, error handlers and
a middleware that wraps every request in the storefront domain context.
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.accounts import auth_router
from storefront.api.carts import cart_router
from storefront.api.catalogue import category_router, product_router
from storefront.api.errors import register_error_handlers
from storefront.api.orders import order_router
from storefront.api.reviews import product_review_router, review_router
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context

__all__ = ["create_app"]


def create_app(domain=storefront) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Carts, orders, catalogue and reviews",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the domain context and bind request details to every log line."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            with domain.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(auth_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(category_router)
    app.include_router(product_review_router)
    app.include_router(product_router)
    app.include_router(review_router)

    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok", "domain": domain.name}

    return app

"""Storefront FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
storefront domain context.

Usage:
    uvicorn storefront.api.app:create_app --factory --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_domain_exception_handlers

from storefront.api.routes import admin_router, checkout_router, order_router, product_router
from storefront.domain import storefront
from storefront.exceptions import AuthorizationError, PersistenceError
from storefront.utils.logging import bind_request_context, clear_request_context


def register_exception_handlers(app: FastAPI) -> None:
    """Protean's domain error mapping plus the storefront's boundary errors."""
    register_domain_exception_handlers(app)

    @app.exception_handler(AuthorizationError)
    async def authorization_error(request: Request, exc: AuthorizationError):
        return JSONResponse(status_code=403, content={"detail": exc.reason})

    @app.exception_handler(PersistenceError)
    async def persistence_error(request: Request, exc: PersistenceError):
        return JSONResponse(
            status_code=503,
            content={"detail": str(exc), "retryable": True},
        )


def include_routers(app: FastAPI) -> None:
    app.include_router(product_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(admin_router)


def create_app() -> FastAPI:
    storefront.init()

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, checkout and order lifecycle",
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
        """Push the storefront domain context for each request."""
        bind_request_context(path=request.url.path, user=request.headers.get("x-user-email"))
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    register_exception_handlers(app)
    include_routers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app

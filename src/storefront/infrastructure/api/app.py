"""Storefront HTTP API built with FastAPI.

``create_app`` wires the order router, the request-id middleware and the
exception handlers that turn domain errors into ``{success: false,
message, ...}`` bodies.  The repositories are built once in the lifespan
hook (or injected by tests) and shared by every request.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    PersistenceFailed,
    ProductNotFound,
    StorageError,
    ValidationError,
)
from storefront.infrastructure.api.routes import router as orders_router
from storefront.infrastructure.bootstrap import Services, build_services
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import REQUEST_ID_CTX

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /": "API information",
    "GET /health": "Health check",
    "GET /api/orders": "List orders",
    "POST /api/orders": "Create order",
    "GET /api/orders/{id}": "Get order by ID",
}


def _failure(status_code: int, message: str, **detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **detail})


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services(settings)
        logger.info(
            "storefront started",
            extra={"environment": settings.environment, "data_dir": str(settings.data_dir)},
        )
        yield
        logger.info("storefront stopped")

    app = FastAPI(title="Storefront Orders", lifespan=lifespan)
    app.state.services = services
    app.include_router(orders_router)
    app.include_router(orders_router, prefix="/api", include_in_schema=False)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = REQUEST_ID_CTX.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
            logger.info(
                "request handled",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                },
            )
        finally:
            REQUEST_ID_CTX.reset(token)
        response.headers["X-Request-ID"] = rid
        return response

    # --- Error mapping --------------------------------------------------------

    @app.exception_handler(ValidationError)
    async def on_validation_error(request: Request, exc: ValidationError):
        return _failure(400, str(exc), errors=exc.reasons)

    @app.exception_handler(RequestValidationError)
    async def on_request_validation_error(request: Request, exc: RequestValidationError):
        reasons = [
            ".".join(str(p) for p in err.get("loc", ())) + f": {err.get('msg')}"
            for err in exc.errors()
        ]
        return _failure(400, "Malformed request", errors=reasons)

    @app.exception_handler(InsufficientStock)
    async def on_insufficient_stock(request: Request, exc: InsufficientStock):
        return _failure(
            400,
            str(exc),
            productId=exc.product_id,
            requested=exc.requested,
            available=exc.available,
        )

    @app.exception_handler(EntityNotFoundError)
    async def on_not_found(request: Request, exc: EntityNotFoundError):
        if isinstance(exc, ProductNotFound):
            return _failure(404, str(exc), productId=exc.product_id)
        return _failure(404, str(exc))

    @app.exception_handler(StorageError)
    async def on_storage_error(request: Request, exc: StorageError):
        logger.error("storage failure", extra={"detail": str(exc)})
        if isinstance(exc, PersistenceFailed):
            return _failure(500, "Error creating order", retryable=True)
        return _failure(500, "Storage unavailable", retryable=exc.retryable)

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _failure(
                404,
                f"Route not found: {request.method} {request.url.path}",
                availableRoutes=ENDPOINTS,
            )
        return _failure(exc.status_code, str(exc.detail))

    # Runs outside the request-id middleware, so the id is restored here.
    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
        token = REQUEST_ID_CTX.set(rid or "-")
        try:
            logger.exception(
                "unhandled error",
                extra={"path": request.url.path, "method": request.method, "status_code": 500},
            )
        finally:
            REQUEST_ID_CTX.reset(token)
        detail = str(exc) if settings.environment == "development" else "Something went wrong"
        response = _failure(500, "Internal server error", error=detail)
        if rid:
            response.headers["X-Request-ID"] = rid
        return response

    # --- Basic routes ---------------------------------------------------------

    @app.get("/health")
    def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - started, 3),
            "environment": settings.environment,
        }

    @app.get("/")
    def index():
        return {
            "message": "Welcome to the Storefront API",
            "version": "1.0.0",
            "endpoints": {
                "health": "/health",
                "orders": "/api/orders",
            },
        }

    return app

import logging

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from partsdesk.api.routes_auth import router as auth_router
from partsdesk.api.routes_catalog import router as catalog_router
from partsdesk.api.routes_health import router as health_router
from partsdesk.api.routes_inventory_adjustments import router as adjustments_router
from partsdesk.api.routes_proxy import router as proxy_router
from partsdesk.api.routes_stats import router as stats_router
from partsdesk.api.routes_stock_transfers import router as stock_transfers_router
from partsdesk.core.config import settings
from partsdesk.core.errors import register_error_handlers
from partsdesk.core.logger import init_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault("Referrer-Policy", "same-origin")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        return response


def _warn_insecure_defaults() -> None:
    flagged = settings.insecure_defaults()
    if flagged:
        logger.warning(
            "Running with development fallbacks for %s; set them before deploying",
            ", ".join(flagged),
        )


def create_app() -> FastAPI:
    init_logging()
    _warn_insecure_defaults()

    is_production = settings.is_production
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    register_error_handlers(app)

    app.include_router(auth_router, prefix=f"{API_PREFIX}/auth")
    app.include_router(catalog_router, prefix=API_PREFIX, tags=["catalog"])
    app.include_router(adjustments_router, prefix=API_PREFIX, tags=["inventory-adjustments"])
    app.include_router(stats_router, prefix=API_PREFIX)
    app.include_router(stock_transfers_router, prefix=API_PREFIX)
    app.include_router(proxy_router, prefix=API_PREFIX)
    app.include_router(health_router)
    return app


app = create_app()

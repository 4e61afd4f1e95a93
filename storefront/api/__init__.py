# storefront/api/__init__.py
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.api.errors import error_body, register_error_handlers
from storefront.api.routers import auth, cart, health, orders, reviews, users
from storefront.domain.errors import RateLimited
from storefront.services.identity_service import IdentityResolver
from storefront.services.notification_service import NotificationService
from storefront.services.rate_limiter import RateLimiter
from storefront.utils.logging import get_logger
from storefront.utils.settings import RATE_LIMIT_ENABLED

logger = get_logger(__name__)


def create_app(
    identity_resolver: IdentityResolver | None = None,
    rate_limiter: RateLimiter | None = None,
    notifications: NotificationService | None = None,
    rate_limit_enabled: bool = RATE_LIMIT_ENABLED,
) -> FastAPI:
    app = FastAPI(title="Storefront Service", version="1.0.0")

    app.state.identity_resolver = identity_resolver or IdentityResolver()
    app.state.notifications = notifications or NotificationService()
    app.state.rate_limiter = None
    if rate_limit_enabled:
        app.state.rate_limiter = rate_limiter or RateLimiter()

    @app.middleware("http")
    async def log_and_limit(request: Request, call_next):
        started = time.perf_counter()

        limiter = request.app.state.rate_limiter
        if limiter is not None and request.url.path != "/health":
            client = request.client.host if request.client else "unknown"
            try:
                await run_in_threadpool(limiter.check, client)
            except RateLimited as e:
                logger.info(f"{request.method} {request.url.path} -> 429")
                return JSONResponse(status_code=e.status_code, content=error_body(e))

        response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f} ms)")
        return response

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(users.router)
    app.include_router(reviews.router)

    return app

"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from src.customer_api.api.http.app_data import ApplicationDependencies
from src.customer_api.api.http.errors import error_response, register_exception_handlers
from src.customer_api.api.http.routers.auth import router as auth_router
from src.customer_api.api.http.routers.customers import router as customers_router
from src.customer_api.api.http.routers.health import router as health_router
from src.customer_api.api.utils.app_startup import configure_logging
from src.customer_api.core.security import PasswordHasher
from src.customer_api.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.customer_api.core.storage import InMemoryCustomerStorage
from src.customer_api.runtime.config.config_data import DEFAULT_SIGNING_SECRET
from src.customer_api.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


def build_dependencies() -> ApplicationDependencies:
    """Create the application-wide services from the active configuration."""
    config = get_config()
    backend = config.persistence.backend

    deps = ApplicationDependencies(
        database_service=DbSessionService(),
        jwt_generation_service=JwtGeneratorService(),
        jwt_verify_service=JwtVerificationService(),
        password_hasher=PasswordHasher(),
        storage_backend=backend,
        memory_storage=InMemoryCustomerStorage() if backend == "memory" else None,
    )
    if backend != "memory":
        deps.database_service.create_all()
    return deps


def validate_startup_config() -> None:
    """Refuse to start in production with unsafe settings."""
    config = get_config()
    if config.app.environment != "production":
        return

    if config.jwt.signing_secret in ("", DEFAULT_SIGNING_SECRET):
        raise RuntimeError("JWT signing secret must be configured in production")

    if "*" in config.app.cors.origins and config.app.cors.allow_credentials:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = build_dependencies()

    deps: ApplicationDependencies = app.state.app_dependencies
    logger.info(
        "Starting up application in {} environment with {} storage",
        get_config().app.environment,
        deps.storage_backend,
    )
    try:
        yield
    finally:
        logger.info("Shutting down application")
        deps.database_service.dispose()


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            response = error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(exc) or "Internal Server Error",
            )
            response.headers["X-Request-ID"] = request_id
            return response


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        dependencies: Pre-built services; built from configuration on startup
            when omitted
    """
    configure_logging()
    validate_startup_config()

    config = get_config()
    is_production = config.app.environment == "production"

    app = FastAPI(
        title="Customer API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.app_dependencies = dependencies

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
        expose_headers=config.app.cors.expose_headers,
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # --- Router registration ---
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(customers_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )

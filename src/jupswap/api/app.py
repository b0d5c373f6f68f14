"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jupswap import __version__
from jupswap.config import Settings, get_settings
from jupswap.errors import InternalError, JupswapError
from jupswap.web.services import ServiceContainer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    owned = app.state.services is None
    if owned:
        app.state.services = ServiceContainer.build(app.state.settings)
        logger.info("Services initialized")
    yield
    # Shutdown
    if owned:
        await app.state.services.close()


async def jupswap_error_handler(request: Request, exc: JupswapError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request: {detail}"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=InternalError().to_dict())


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
        services: Prebuilt services; when omitted they are built, and
            closed, by the lifespan
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Jupswap API",
        description="Jupiter swap execution and Solana wallet holdings API",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.services = services

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(JupswapError, jupswap_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    from jupswap.api.routes import health
    from jupswap.web.controllers import keys_router, swaps_router, tokens_router, wallet_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(swaps_router)
    app.include_router(wallet_router)
    app.include_router(tokens_router)
    app.include_router(keys_router)

    return app

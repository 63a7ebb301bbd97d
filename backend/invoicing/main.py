"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import invoicing.models  # noqa: F401
from invoicing.api.v1.router import api_router
from invoicing.api.v1.endpoints.health import get_health_controller
from invoicing.core.config import settings
from invoicing.core.exceptions import setup_exception_handlers
from invoicing.core.logging import setup_logging
from invoicing.db.session import init_db, close_db
from invoicing.deps import di_container


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, the database and the DI container.
    """
    # Startup
    setup_logging()
    await init_db()

    container = di_container.build_container()
    app.state.container = container
    di_container._container = container

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Contracts, invoices and payments API",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health():
        """Root-level health check endpoint."""
        return await get_health_controller().get_health()

    setup_exception_handlers(app)

    return app


app = create_app()

"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    boms_router,
    customer_orders_router,
    excel_router,
    health_router,
    production_router,
    products_router,
    purchase_orders_router,
    raw_materials_router,
    shipments_router,
    stock_router,
    suppliers_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, opens the pool and loads the inventory workspace
    on startup; closes the pool on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from src.application.services import get_workspace
        from src.infrastructure.storage.sqlite import get_pool
        from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

        # Run migrations
        results = await run_migrations()
        if not all(r.success for r in results):
            raise RuntimeError("database migration failed")
        logger.info("database_initialized", applied=len(results))

        # Initialize connection pool
        await get_pool()
        logger.info("connection_pool_ready")

        # Load every entity into memory
        workspace = await get_workspace()
        logger.info(
            "inventory_loaded",
            products=len(workspace.entity_store.products),
            boms=len(workspace.entity_store.boms),
        )

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    try:
        from src.application.services import get_workspace, reset_services
        from src.infrastructure.storage.sqlite import close_pool

        workspace = await get_workspace()
        if workspace.entity_store.has_pending_changes:
            logger.warning("unsaved_changes_at_shutdown")
        reset_services()

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="StokTakip Inventory API",
        description="Inventory and production tracking: products, recipes, stock ledger and Excel import",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(boms_router)
    app.include_router(raw_materials_router)
    app.include_router(production_router)
    app.include_router(shipments_router)
    app.include_router(stock_router)
    app.include_router(customer_orders_router)
    app.include_router(suppliers_router)
    app.include_router(purchase_orders_router)
    app.include_router(excel_router)

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict[str, str]:
    """API info."""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Root health endpoint (for docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )

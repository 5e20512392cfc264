"""
FastAPI Application Factory
Creates and configures the FastAPI app instance
"""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from movieapp.api.endpoints import catalog, health, library, search, settings as settings_endpoint
from movieapp.core.config import settings
from movieapp.services.context import CatalogContext
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    logger.info("Starting Movie Catalog")
    owns_context = getattr(app.state, "catalog", None) is None
    if owns_context:
        app.state.catalog = await CatalogContext.create(settings)
    logger.info(f"Active provider: {app.state.catalog.selector.current().kind}")

    yield

    # Shutdown
    logger.info("Shutting down Movie Catalog")
    if owns_context:
        await app.state.catalog.close()
        app.state.catalog = None


def create_app(context: Optional[CatalogContext] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        context: Pre-built catalog context; one is created at startup otherwise
    """

    app = FastAPI(
        title="Movie Catalog",
        description="Browse, search and bookmark movies from TMDB or the bundled dataset",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.catalog = context

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(search.router)
    app.include_router(settings_endpoint.router)
    app.include_router(library.router)

    return app

"""FastAPI application exposing the lexicon search engine."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .api import definition_router, health_router, metrics_router, search_router
from .api.stats import QueryMetrics
from .config import Settings, get_settings
from .core.engine import SearchEngine
from .models.response import ErrorResponse
from .store.base import LexiconStore, StoreError
from .store.sqlite_store import SQLiteLexiconStore

logger = structlog.get_logger()


def configure_logging(settings: Settings) -> None:
    """Configure structured logging for the service."""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
    
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_app(settings: Optional[Settings] = None, store: Optional[LexiconStore] = None) -> FastAPI:
    """
    Build the application.
    
    Args:
        settings: Application settings (uses the environment if None)
        store: Lexicon store to serve; when None the SQLite database at
            ``settings.db_path`` is opened read-only on startup
            
    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting Lexicon Search service", version=settings.app_version)
        
        owned_store = None
        if app.state.engine is None:
            try:
                owned_store = SQLiteLexiconStore(settings.db_path, read_only=True)
            except StoreError as e:
                logger.error("Failed to open lexicon database", db_path=settings.db_path, error=str(e))
                raise
            app.state.engine = SearchEngine(owned_store, settings)
            logger.info("Lexicon database opened", db_path=settings.db_path)
        
        yield
        
        # Shutdown
        if owned_store is not None:
            owned_store.close()
            app.state.engine = None
        logger.info("Shutting down Lexicon Search service")
    
    app = FastAPI(
        title=settings.app_name,
        description="Offline dictionary search with exact, prefix, full-text and typo-tolerant matching",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.metrics = QueryMetrics()
    app.state.started_at = time.time()
    app.state.engine = SearchEngine(store, settings) if store is not None else None
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    
    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        """Log all HTTP requests."""
        start_time = time.time()
        
        logger.info(
            "Request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else None
        )
        
        response = await call_next(request)
        
        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            process_time_ms=round(process_time * 1000, 2)
        )
        
        return response
    
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle global exceptions."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True
        )
        
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                message="An unexpected error occurred",
                details={"exception": str(exc)} if settings.debug else None
            ).model_dump(mode="json")
        )
    
    app.include_router(search_router)
    app.include_router(definition_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    
    @app.get("/", summary="Root endpoint", description="Get basic information about the API")
    async def root() -> dict:
        """Root endpoint with basic API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "Offline dictionary search with typo tolerance",
            "docs_url": "/docs",
            "health_url": "/api/v1/health",
            "endpoints": {
                "search": "/api/v1/search/{query}?limit=&offset=",
                "definition": "/api/v1/definition/{word_id}",
                "health": "/api/v1/health",
                "metrics": "/api/v1/metrics"
            },
            "status": "running"
        }
    
    return app


if __name__ == "__main__":
    import uvicorn
    
    settings = get_settings()
    uvicorn.run(
        "lexicon_search.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )

"""
Main Application Entry Point.

This module builds the FastAPI application: it boots the plugin on startup,
configures middleware (CORS, host lifecycle), registers the exception
handlers and includes all API routers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sparxstar_gluon.core.logging_config import get_logger, setup_logging
from sparxstar_gluon.core.monitoring import initialize_logfire
from sparxstar_gluon.plugin import GluonPlugin

from .api.v1 import abilities, categories, health, mcp, notices
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import HostLifecycleMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


def create_app(plugin: Optional[GluonPlugin] = None) -> FastAPI:
    """
    Build the application around ``plugin``.

    Without an explicit plugin one is built from the environment settings.
    """
    if plugin is None:
        plugin = GluonPlugin.from_settings(settings, mcp_adapter=settings.mcp_adapter_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifespan events.

        Boots the plugin on startup. A plugin that cannot boot leaves the
        server running with its admin notices available.
        """
        logger.info("Starting up SPARXSTAR Gluon Server...")
        if not plugin.booted and not plugin.boot():
            logger.error("Plugin did not boot; see admin notices")

        yield

        logger.info("Shutting down SPARXSTAR Gluon Server...")

    app = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        SPARXSTAR Gluon Server API

        Capability discovery and invocation for AI agents, plus the consent-gated
        session cookie attached to every response.
        """,
        version=plugin.version,
        openapi_url=f"{constant.API_V1_STR}/openapi.json",
        docs_url=f"{constant.API_V1_STR}/docs",
        redoc_url=f"{constant.API_V1_STR}/redoc",
        lifespan=lifespan,
    )
    app.state.plugin = plugin

    setup_exception_handlers(app)
    initialize_logfire(app)

    app.add_middleware(HostLifecycleMiddleware, plugin=plugin)

    cors = settings.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(abilities.router, prefix=f"{constant.ABILITIES_API_STR}/abilities", tags=["abilities"])
    app.include_router(categories.router, prefix=f"{constant.ABILITIES_API_STR}/categories", tags=["abilities"])
    app.include_router(notices.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
    app.include_router(mcp.router, prefix=f"{constant.API_V1_STR}/mcp", tags=["mcp"])
    return app


app = create_app()

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from scalar_fastapi import get_scalar_api_reference

from .routers import meta, routers
from .middleware import setup_cors_middleware
from .graph.config import GraphServiceConfig, get_config_path
from .graph.lifecycle import GraphLifecycle
from .graph.registry import GraphRegistry

# Setup logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str] = None) -> GraphServiceConfig:
    """Load the server configuration, falling back to defaults if the file is missing."""
    # Load environment variables from .env file
    load_dotenv()

    if config_path is None:
        config_path = get_config_path()

    if not os.path.exists(config_path):
        logger.warning(f"{config_path} not found, using default graph configuration")
        return GraphServiceConfig()

    config = GraphServiceConfig.from_file(config_path)
    config.load_environment(Path(config_path).resolve().parent)
    logger.info(f"Loaded graph configuration from {config_path}")
    return config


def create_app(
    config: Optional[GraphServiceConfig] = None,
    registry: Optional[GraphRegistry] = None,
) -> FastAPI:
    """Create the FastAPI application serving a graph registry.

    Args:
        config: Server configuration; loaded from file when omitted
        registry: Registry to serve; built from ``config`` when omitted

    Returns:
        FastAPI: The configured application
    """
    if config is None:
        config = load_config()
    if registry is None:
        registry = GraphRegistry.from_config(config)

    app = FastAPI(
        title="Router Graph Server",
        version="0.1.0",
        description="""
    Loads, serves and manages the lifecycle of serialized routing graphs, one per router id.

    ## Features
    - **Router Registry**: At most one loaded graph per router id
    - **Routers API**: Register, reload and evict graphs at runtime
    - **Load Levels**: Switch how much graph data is materialized; graphs reload on change
    - **Pluggable Resources**: Graph files from local paths, the Python path or HTTP
    """,
        docs_url=None,  # Disable default docs
        redoc_url=None,  # Disable redoc
        # "/routers/" must not be redirected onto the bulk "/routers" endpoints
        redirect_slashes=False,
        openapi_tags=[
            {"name": "Meta", "description": "System metadata and health check endpoints"},
            {
                "name": "Routers",
                "description": "Router graph management - register, reload and evict graphs",
            },
        ],
    )
    app.state.graph_registry = registry
    app.state.graph_config = config

    setup_cors_middleware(app, config.cors)

    @app.on_event("startup")
    def startup_event():
        """Register the configured graphs during FastAPI startup."""
        logger.info("=== Starting graph server ===")
        router_ids = GraphLifecycle.from_config(registry, config).start()
        logger.info(f"Available routers: {sorted(router_ids)}")
        logger.info("=== Graph server startup completed ===")

    @app.on_event("shutdown")
    def shutdown_event():
        """Release every loaded graph during FastAPI shutdown."""
        logger.info("=== Shutting down graph server ===")
        evicted = registry.evict_all()
        logger.info(f"Released {evicted} graphs")

    app.include_router(meta.router)
    app.include_router(routers.router)

    # Add Scalar API documentation
    @app.get("/docs", include_in_schema=False)
    async def scalar_docs():
        return get_scalar_api_reference(
            openapi_url=app.openapi_url, title=f"{app.title} - API Documentation"
        )

    @app.get("/")
    async def root():
        return {"message": "Router Graph Server - Visit /docs for API documentation"}

    return app


app = create_app()

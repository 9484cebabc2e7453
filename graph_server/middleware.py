"""Middleware for FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
import logging

from .graph.config import CorsConfig

logger = logging.getLogger(__name__)

# Cross-origin browsers may read registry state but never mutate it unless the
# configuration explicitly allows more methods.
READ_ONLY_METHODS = ["GET", "HEAD"]


def setup_cors_middleware(app: FastAPI, cors_config: Optional[CorsConfig] = None) -> None:
    """Setup CORS middleware from the server configuration.

    Without a ``cors`` section, any origin may issue read-only requests; the
    routers API's PUT and DELETE endpoints are refused at preflight.

    Args:
        app: FastAPI application instance
        cors_config: CORS section of the graph server configuration
    """
    if cors_config is None:
        cors_config = CorsConfig()

    allow_origins = cors_config.allow_origins if cors_config.allow_origins is not None else ["*"]
    allow_methods = cors_config.allow_methods or READ_ONLY_METHODS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=bool(cors_config.allow_credentials),
        allow_methods=allow_methods,
        allow_headers=cors_config.allow_headers or [],
        allow_origin_regex=cors_config.allow_origin_regex,
        expose_headers=cors_config.expose_headers or [],
        max_age=cors_config.max_age if cors_config.max_age is not None else 600,
    )

    logger.info(f"CORS middleware configured with origins {allow_origins}, methods {allow_methods}")

"""API schemas for the graph server."""

# Router schemas
from .router import (
    RouterInfo,
    RouterList,
    EvictAllResponse,
    ReloadResponse,
    LoadLevelBody,
)

# Common schemas
from .common import ErrorResponse

__all__ = [
    # Router
    "RouterInfo",
    "RouterList",
    "EvictAllResponse",
    "ReloadResponse",
    "LoadLevelBody",
    # Common
    "ErrorResponse",
]

"""Router graph loading and registry module."""

from .config import GraphServiceConfig, CorsConfig
from .errors import (
    GraphLoadError,
    InvalidRouterIdError,
    ResourceUnavailableError,
    DeserializationError,
)
from .ids import is_legal_router_id
from .lifecycle import GraphLifecycle
from .loader import (
    GraphDeserializer,
    GraphLoader,
    LoadLevel,
    LoadResult,
    PickleGraphDeserializer,
)
from .locator import GRAPH_FILENAME, ResourceLocator
from .registry import GraphRegistry
from .resolver import DefaultResourceResolver, ResourceResolver

__all__ = [
    "GraphServiceConfig",
    "CorsConfig",
    "GraphLoadError",
    "InvalidRouterIdError",
    "ResourceUnavailableError",
    "DeserializationError",
    "is_legal_router_id",
    "GraphLifecycle",
    "GraphDeserializer",
    "GraphLoader",
    "LoadLevel",
    "LoadResult",
    "PickleGraphDeserializer",
    "GRAPH_FILENAME",
    "ResourceLocator",
    "GraphRegistry",
    "DefaultResourceResolver",
    "ResourceResolver",
]

"""Exceptions raised while loading router graphs."""

from __future__ import annotations

from typing import Optional


class GraphLoadError(Exception):
    """Base exception for graph loading failures."""

    def __init__(self, router_id: str, message: str):
        self.router_id = router_id
        super().__init__(message)


class InvalidRouterIdError(GraphLoadError):
    """Raised when a router id contains characters outside [A-Za-z0-9_-]."""

    def __init__(self, router_id: str):
        super().__init__(
            router_id,
            f"routerId '{router_id}' contains characters other than alphanumeric, underscore, and dash",
        )


class ResourceUnavailableError(GraphLoadError):
    """Raised when the graph resource cannot be resolved or opened."""

    def __init__(self, router_id: str, address: str, reason: Optional[str] = None):
        self.address = address
        message = f"Graph file not found or not openable for routerId '{router_id}' at {address}"
        if reason:
            message += f": {reason}"
        super().__init__(router_id, message)


class DeserializationError(GraphLoadError):
    """Raised when an opened graph resource cannot be turned into a graph."""

    def __init__(self, router_id: str, address: str, reason: Optional[str] = None):
        self.address = address
        message = f"Exception while loading graph for routerId '{router_id}' from {address}"
        if reason:
            message += f": {reason}"
        super().__init__(router_id, message)

"""Construction of graph resource addresses from router ids."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from .resolver import ResourceResolver

logger = logging.getLogger(__name__)

GRAPH_FILENAME = "Graph.obj"


class ResourceLocator:
    """Maps router ids to graph resource addresses under a base location.

    Serialized graphs live in sub-directories immediately below the base; the
    router id of a graph is the name of its sub-directory. The default router
    id (empty string) maps to a graph file directly under the base.
    """

    def __init__(self, base: str, resolver: ResourceResolver):
        self.base = base
        self.resolver = resolver

    def locate(self, router_id: str) -> str:
        """Build the address of the graph file for ``router_id``.

        Separators are only added where needed; some backends (object storage
        in particular) reject redundant slashes.
        """
        parts = [self.base]
        if not self.base.endswith(("/", os.sep)):
            parts.append("/")
        if router_id:
            parts.append(router_id)
            parts.append("/")
        parts.append(GRAPH_FILENAME)
        address = "".join(parts)
        logger.debug(f"graph file for routerId '{router_id}' is at {address}")
        return address

    def open(self, address: str) -> BinaryIO:
        """Open an address built by :meth:`locate` through the resolver."""
        return self.resolver.open(address)

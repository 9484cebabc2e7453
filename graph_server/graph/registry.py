"""Thread-safe registry of loaded router graphs."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Set

from .config import GraphServiceConfig
from .loader import GraphDeserializer, GraphLoader, LoadLevel, PickleGraphDeserializer
from .locator import ResourceLocator
from .resolver import DefaultResourceResolver, ResourceResolver

logger = logging.getLogger(__name__)


class GraphRegistry:
    """Owns the mapping from router id to loaded graph.

    At most one graph is registered per router id. Every read and write of the
    id->graph and id->level maps goes through ``self._lock``. Loading (I/O and
    deserialization) runs outside the lock so distinct router ids load in
    parallel; ``reload_all`` is the exception and holds the lock for its
    whole batch.
    """

    def __init__(
        self,
        loader: GraphLoader,
        default_router_id: str = "",
        load_level: LoadLevel = LoadLevel.FULL,
    ) -> None:
        self._loader = loader
        self._default_router_id = default_router_id
        self._load_level = load_level
        # Re-entrant: reload_all holds the lock while register/evict take it again.
        self._lock = threading.RLock()
        self._graphs: Dict[str, Any] = {}
        self._levels: Dict[str, LoadLevel] = {}

    @classmethod
    def from_config(
        cls,
        config: GraphServiceConfig,
        resolver: Optional[ResourceResolver] = None,
        deserializer: Optional[GraphDeserializer] = None,
    ) -> GraphRegistry:
        """Build a registry wired to the configured resource base."""
        if resolver is None:
            resolver = DefaultResourceResolver(http_timeout=config.http_timeout)
        if deserializer is None:
            deserializer = PickleGraphDeserializer()

        locator = ResourceLocator(config.resource_base, resolver)
        return cls(
            GraphLoader(locator, deserializer),
            default_router_id=config.default_router_id,
            load_level=config.load_level,
        )

    @property
    def default_router_id(self) -> str:
        return self._default_router_id

    @property
    def load_level(self) -> LoadLevel:
        with self._lock:
            return self._load_level

    def get(self, router_id: Optional[str] = None) -> Optional[Any]:
        """Return the graph registered under ``router_id``, or None.

        An empty or missing router id selects the default router.
        """
        if not router_id:
            router_id = self._default_router_id
            logger.debug(f"routerId not specified, set to default of '{router_id}'")

        with self._lock:
            found = router_id in self._graphs
            graph = self._graphs.get(router_id)

        if not found:
            logger.error(f"no graph registered with the routerId '{router_id}'")
        return graph

    def get_load_level(self, router_id: str) -> Optional[LoadLevel]:
        """Return the load level ``router_id`` was last loaded at, if registered."""
        with self._lock:
            return self._levels.get(router_id)

    def register(self, router_id: str, pre_evict: bool = True) -> bool:
        """Load the graph for ``router_id`` and install it.

        Args:
            router_id: The router id to load
            pre_evict: Drop any existing graph for this id before loading. The id
                is then unregistered while the load runs, and stays unregistered
                if the load fails.

        Returns:
            bool: True if a graph was loaded and installed
        """
        if pre_evict:
            self.evict(router_id)

        logger.info(f"registering routerId '{router_id}'")
        with self._lock:
            level = self._load_level
        result = self._loader.load(router_id, level)
        if not result.ok:
            logger.info(f"routerId '{router_id}' was not registered ({result.error})")
            return False

        with self._lock:
            self._graphs[router_id] = result.graph
            self._levels[router_id] = level
        return True

    def register_graph(self, router_id: str, graph: Any) -> bool:
        """Install an already constructed graph, bypassing the loader.

        Returns:
            bool: True if ``router_id`` was not registered before, False if an
            existing graph was replaced
        """
        with self._lock:
            fresh = router_id not in self._graphs
            self._graphs[router_id] = graph
            self._levels[router_id] = self._load_level
        return fresh

    def evict(self, router_id: str) -> bool:
        """Remove the graph for ``router_id``. Returns whether one was registered."""
        logger.debug(f"evicting graph '{router_id}'")
        with self._lock:
            existed = router_id in self._graphs
            self._graphs.pop(router_id, None)
            self._levels.pop(router_id, None)
        return existed

    def evict_all(self) -> int:
        """Remove every graph. Returns the number of graphs removed."""
        with self._lock:
            n = len(self._graphs)
            self._graphs.clear()
            self._levels.clear()
        logger.info(f"evicted {n} graphs")
        return n

    def router_ids(self) -> Set[str]:
        """Return a snapshot of the registered router ids."""
        with self._lock:
            return set(self._graphs.keys())

    def set_load_level(self, level: LoadLevel) -> None:
        """Change the load level, reloading every graph if it actually changed."""
        with self._lock:
            previous = self._load_level
            if level == previous:
                return
            self._load_level = level
        logger.info(f"load level changed from {previous.value} to {level.value}, reloading graphs")
        self.reload_all(pre_evict=True)

    def reload_all(self, pre_evict: bool = True) -> bool:
        """Reload every registered graph.

        The registry lock is held for the whole batch, so other callers block
        until every graph has been reloaded.

        Returns:
            bool: True only if every router id reloaded successfully
        """
        all_succeeded = True
        with self._lock:
            for router_id in self.router_ids():
                success = self.register(router_id, pre_evict)
                all_succeeded = all_succeeded and success
        return all_succeeded

    def __len__(self) -> int:
        with self._lock:
            return len(self._graphs)

    def __contains__(self, router_id: object) -> bool:
        with self._lock:
            return router_id in self._graphs

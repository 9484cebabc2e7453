"""Startup registration policy for the graph registry."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set

from .config import GraphServiceConfig
from .registry import GraphRegistry

logger = logging.getLogger(__name__)


class GraphLifecycle:
    """Registers the configured graphs when the server starts.

    Based on the auto-register list, every listed router id is registered, then
    the default router's graph is loaded if it is still missing. A warning is
    logged if nothing ends up registered.
    """

    def __init__(
        self,
        registry: GraphRegistry,
        auto_register: Iterable[str] = (),
        default_router_id: str = "",
        attempt_register_default: bool = True,
        resource_base: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.auto_register = list(auto_register)
        self.default_router_id = default_router_id
        self.attempt_register_default = attempt_register_default
        self.resource_base = resource_base

    @classmethod
    def from_config(
        cls, registry: GraphRegistry, config: GraphServiceConfig
    ) -> GraphLifecycle:
        return cls(
            registry,
            auto_register=config.auto_register,
            default_router_id=config.default_router_id,
            attempt_register_default=config.attempt_register_default,
            resource_base=config.resource_base,
        )

    def start(self) -> Set[str]:
        """Run the startup registration. Returns the registered router ids."""
        if self.auto_register:
            logger.info(f"attempting to automatically register routerIds {self.auto_register}")
            if self.resource_base is not None:
                logger.info(f"graph files will be sought in paths relative to {self.resource_base}")
            for router_id in self.auto_register:
                self.registry.register(router_id, pre_evict=True)
        else:
            logger.info("no list of routerIds was provided for automatic registration.")

        if self.attempt_register_default and self.default_router_id not in self.registry:
            logger.info(f"Attempting to load graph for default routerId '{self.default_router_id}'.")
            self.registry.register(self.default_router_id, pre_evict=True)

        router_ids = self.registry.router_ids()
        if not router_ids:
            logger.warning(
                "No graphs have been loaded/registered. "
                "You must use the routers API to register one or more graphs before routing."
            )
        return router_ids

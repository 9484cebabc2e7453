"""Graph loading: open a router's graph resource and deserialize it."""

from __future__ import annotations

import logging
import pickle
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, BinaryIO, Optional

from .errors import (
    DeserializationError,
    GraphLoadError,
    InvalidRouterIdError,
    ResourceUnavailableError,
)
from .ids import is_legal_router_id
from .locator import ResourceLocator

logger = logging.getLogger(__name__)


@total_ordering
class LoadLevel(Enum):
    """How much of a graph is materialized on load, ordered BASIC < FULL < DEBUG."""

    BASIC = "BASIC"
    FULL = "FULL"
    DEBUG = "DEBUG"

    @property
    def rank(self) -> int:
        return list(LoadLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, LoadLevel):
            return NotImplemented
        return self.rank < other.rank


class GraphDeserializer(ABC):
    """Turns an open graph stream into a graph object."""

    @abstractmethod
    def deserialize(self, stream: BinaryIO, level: LoadLevel) -> Any:
        """Read a graph from ``stream`` at the requested load level."""
        pass


class PickleGraphDeserializer(GraphDeserializer):
    """Reads graphs stored as a single pickled object.

    If the unpickled graph has a callable ``apply_load_level`` it is called
    with the requested level before the graph is handed out.

    Graph files are executable input to ``pickle``; only load trusted files.
    """

    def deserialize(self, stream: BinaryIO, level: LoadLevel) -> Any:
        graph = pickle.load(stream)
        if graph is None:
            raise ValueError("graph file contains no graph")

        apply_load_level = getattr(graph, "apply_load_level", None)
        if callable(apply_load_level):
            apply_load_level(level)

        return graph


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one router's graph: either a graph or an error."""

    router_id: str
    level: LoadLevel
    graph: Any = None
    error: Optional[GraphLoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.graph is not None


class GraphLoader:
    """Loads a router's graph through a locator and a deserializer.

    Failures never propagate: they are logged and reported in the returned
    :class:`LoadResult`.
    """

    def __init__(self, locator: ResourceLocator, deserializer: GraphDeserializer):
        self.locator = locator
        self.deserializer = deserializer

    def load(self, router_id: str, level: LoadLevel) -> LoadResult:
        """Load the graph for ``router_id`` at ``level``.

        Args:
            router_id: The router id, already substituted for the default if needed
            level: The load level to pass to the deserializer

        Returns:
            LoadResult: with ``graph`` set on success, ``error`` set otherwise
        """
        try:
            graph = self._load(router_id, level)
        except InvalidRouterIdError as e:
            logger.error(str(e))
            return LoadResult(router_id=router_id, level=level, error=e)
        except ResourceUnavailableError as e:
            logger.warning(str(e))
            return LoadResult(router_id=router_id, level=level, error=e)
        except DeserializationError as e:
            logger.error(str(e), exc_info=True)
            return LoadResult(router_id=router_id, level=level, error=e)

        return LoadResult(router_id=router_id, level=level, graph=graph)

    def _load(self, router_id: str, level: LoadLevel) -> Any:
        if not is_legal_router_id(router_id):
            raise InvalidRouterIdError(router_id)

        logger.debug(f"loading serialized graph for routerId '{router_id}' at level {level.value}")
        address = self.locator.locate(router_id)

        try:
            stream = self.locator.open(address)
        except Exception as e:
            raise ResourceUnavailableError(router_id, address, str(e)) from e

        logger.debug("graph input stream successfully opened. now loading.")
        try:
            with stream:
                graph = self.deserializer.deserialize(stream, level)
        except Exception as e:
            raise DeserializationError(router_id, address, str(e)) from e

        if graph is None:
            raise DeserializationError(router_id, address, "deserializer returned no graph")

        return graph

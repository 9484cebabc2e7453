from __future__ import annotations

import io
import threading
from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Optional

import pytest

from graph_server.graph import (
    GraphDeserializer,
    GraphLoader,
    GraphRegistry,
    LoadLevel,
    ResourceLocator,
    ResourceResolver,
)

BASE = "file:/var/otp/graphs"


@dataclass
class FakeGraph:
    name: str
    level: LoadLevel


class FakeResolver(ResourceResolver):
    """Serves in-memory graph files keyed by router id."""

    def __init__(self, files: Dict[str, bytes]):
        self.files = dict(files)
        self.opened: List[str] = []
        self._lock = threading.Lock()

    def address_for(self, router_id: str) -> str:
        return f"{BASE}/{router_id}/Graph.obj" if router_id else f"{BASE}/Graph.obj"

    def open(self, address: str) -> BinaryIO:
        with self._lock:
            self.opened.append(address)
        for router_id, data in self.files.items():
            if self.address_for(router_id) == address:
                return io.BytesIO(data)
        raise FileNotFoundError(address)


class FakeDeserializer(GraphDeserializer):
    """Decodes the file content as the graph name; b"corrupt" fails."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.block: Optional[threading.Event] = None
        self.entered = threading.Event()
        self._lock = threading.Lock()

    def deserialize(self, stream: BinaryIO, level: LoadLevel) -> FakeGraph:
        data = stream.read()
        with self._lock:
            self.calls.append((data, level))
        self.entered.set()
        if self.block is not None:
            self.block.wait(timeout=5)
        if data == b"corrupt":
            raise ValueError("corrupt graph")
        return FakeGraph(name=data.decode(), level=level)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver({"a": b"a", "b": b"b", "": b"default", "broken": b"corrupt"})


@pytest.fixture
def deserializer() -> FakeDeserializer:
    return FakeDeserializer()


@pytest.fixture
def loader(resolver: FakeResolver, deserializer: FakeDeserializer) -> GraphLoader:
    return GraphLoader(ResourceLocator(BASE, resolver), deserializer)


@pytest.fixture
def registry(loader: GraphLoader) -> GraphRegistry:
    return GraphRegistry(loader)

from __future__ import annotations

import sys
from contextlib import contextmanager

import httpx
import pytest

from graph_server.graph import DefaultResourceResolver, ResourceLocator
from graph_server.graph import resolver as resolver_module


def test_locate_router_graph_under_base() -> None:
    loc = ResourceLocator("file:/var/otp/graphs", DefaultResourceResolver())
    assert loc.locate("boston") == "file:/var/otp/graphs/boston/Graph.obj"


def test_locate_default_router_graph() -> None:
    loc = ResourceLocator("file:/var/otp/graphs", DefaultResourceResolver())
    assert loc.locate("") == "file:/var/otp/graphs/Graph.obj"


def test_locate_does_not_double_trailing_separator() -> None:
    loc = ResourceLocator("url:https://bucket.example.com/graphs/", DefaultResourceResolver())
    assert loc.locate("boston") == "url:https://bucket.example.com/graphs/boston/Graph.obj"
    assert loc.locate("") == "url:https://bucket.example.com/graphs/Graph.obj"


def test_file_resolver_opens_local_graph(tmp_path) -> None:
    (tmp_path / "boston").mkdir()
    (tmp_path / "boston" / "Graph.obj").write_bytes(b"graph-bytes")

    loc = ResourceLocator(f"file:{tmp_path}", DefaultResourceResolver())
    with loc.open(loc.locate("boston")) as f:
        assert f.read() == b"graph-bytes"

    # Bare paths are local files too.
    bare = ResourceLocator(str(tmp_path), DefaultResourceResolver())
    with bare.open(bare.locate("boston")) as f:
        assert f.read() == b"graph-bytes"


def test_file_resolver_missing_file_raises(tmp_path) -> None:
    resolver = DefaultResourceResolver()
    with pytest.raises(OSError):
        resolver.open(f"file:{tmp_path}/nowhere/Graph.obj")


def test_classpath_resolver_searches_path_entries(tmp_path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    (second / "graphs" / "nyc").mkdir(parents=True)
    first.mkdir()
    (second / "graphs" / "nyc" / "Graph.obj").write_bytes(b"nyc")

    resolver = DefaultResourceResolver(search_path=[str(first), str(second)])
    with resolver.open("classpath:graphs/nyc/Graph.obj") as f:
        assert f.read() == b"nyc"

    with pytest.raises(FileNotFoundError):
        resolver.open("classpath:graphs/missing/Graph.obj")


def test_classpath_resolver_defaults_to_sys_path(tmp_path, monkeypatch) -> None:
    (tmp_path / "Graph.obj").write_bytes(b"default")
    monkeypatch.setattr(sys, "path", [str(tmp_path)])

    with DefaultResourceResolver().open("classpath:Graph.obj") as f:
        assert f.read() == b"default"


def test_url_resolver_fetches_with_httpx(monkeypatch) -> None:
    seen = {}

    @contextmanager
    def fake_stream(method, url, timeout, follow_redirects):
        seen["request"] = (method, url)
        seen["timeout"] = timeout
        yield httpx.Response(200, content=b"remote", request=httpx.Request(method, url))

    monkeypatch.setattr(httpx, "stream", fake_stream)

    resolver = DefaultResourceResolver(http_timeout=5.0)
    with resolver.open("url:https://example.com/g/Graph.obj") as stream:
        assert stream.read() == b"remote"
    assert seen == {"request": ("GET", "https://example.com/g/Graph.obj"), "timeout": 5.0}
    assert resolver.open("https://example.com/g/Graph.obj").read() == b"remote"


def test_url_resolver_spools_large_downloads_to_disk(monkeypatch) -> None:
    chunk = b"x" * 1024

    @contextmanager
    def fake_stream(method, url, timeout, follow_redirects):
        yield httpx.Response(200, content=chunk * 8, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx, "stream", fake_stream)
    monkeypatch.setattr(resolver_module, "SPOOL_MAX_SIZE", len(chunk))

    with DefaultResourceResolver().open("url:https://example.com/big/Graph.obj") as stream:
        assert stream._rolled
        assert stream.read() == chunk * 8


def test_url_resolver_http_error_is_os_error(monkeypatch) -> None:
    @contextmanager
    def fake_stream(method, url, timeout, follow_redirects):
        yield httpx.Response(404, request=httpx.Request(method, url))

    monkeypatch.setattr(httpx, "stream", fake_stream)

    with pytest.raises(OSError):
        DefaultResourceResolver().open("url:https://example.com/missing/Graph.obj")

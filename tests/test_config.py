from __future__ import annotations

import json
import os
import pickle

import pytest

from graph_server.graph import GraphRegistry, GraphServiceConfig, LoadLevel


def test_defaults() -> None:
    config = GraphServiceConfig()
    assert config.resource_base == "file:/var/otp/graphs"
    assert config.auto_register == []
    assert config.default_router_id == ""
    assert config.attempt_register_default is True
    assert config.load_level == LoadLevel.FULL


def test_path_overrides_resource_base() -> None:
    config = GraphServiceConfig(path="/srv/graphs")
    assert config.resource_base == "file:/srv/graphs"


def test_illegal_router_ids_rejected() -> None:
    with pytest.raises(ValueError):
        GraphServiceConfig(auto_register=["ok", "not/ok"])
    with pytest.raises(ValueError):
        GraphServiceConfig(default_router_id="a.b")


def test_from_file(tmp_path) -> None:
    path = tmp_path / "graphs.json"
    path.write_text(
        json.dumps(
            {
                "resource_base": "classpath:graphs",
                "auto_register": ["boston", "nyc"],
                "load_level": "DEBUG",
                "attempt_register_default": False,
            }
        )
    )
    config = GraphServiceConfig.from_file(path)
    assert config.resource_base == "classpath:graphs"
    assert config.auto_register == ["boston", "nyc"]
    assert config.load_level == LoadLevel.DEBUG
    assert config.attempt_register_default is False


def test_from_file_errors(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        GraphServiceConfig.from_file(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(ValueError):
        GraphServiceConfig.from_file(bad)

    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"load_level": "EVERYTHING"}))
    with pytest.raises(ValueError):
        GraphServiceConfig.from_file(invalid)


def test_load_environment_from_dict(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("GRAPH_TEST_VAR", raising=False)
    config = GraphServiceConfig(env={"GRAPH_TEST_VAR": "yes"})
    config.load_environment(tmp_path)
    assert os.environ["GRAPH_TEST_VAR"] == "yes"
    monkeypatch.delenv("GRAPH_TEST_VAR")


def test_registry_from_config_loads_from_resource_base(tmp_path) -> None:
    (tmp_path / "boston").mkdir()
    (tmp_path / "boston" / "Graph.obj").write_bytes(pickle.dumps(["stops"]))

    config = GraphServiceConfig(path=str(tmp_path), load_level="BASIC", default_router_id="boston")
    reg = GraphRegistry.from_config(config)
    assert reg.load_level == LoadLevel.BASIC
    assert reg.register("boston")
    assert reg.get() == ["stops"]

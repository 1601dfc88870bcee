"""Unit tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from vargraph.config import load_config

_KEYS = [
    "STORE_BACKEND",
    "NEO4J_PROTOCOL",
    "NEO4J_HOST",
    "NEO4J_PORT",
    "NEO4J_USERNAME",
    "NEO4J_PASSWORD",
    "NEO4J_DATABASE",
    "NEO4J_POOL_SIZE",
    "NEO4J_POPULATE_ON_START",
    "CATALOG_PATHS",
    "API_PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(f"VARGRAPH_{key}", raising=False)


class TestDefaults:
    def test_defaults_when_unset(self) -> None:
        config = load_config()
        assert config.store.backend == "memory"
        assert config.store.uri == "bolt://localhost:7687"
        assert config.store.username == "neo4j"
        assert config.store.password == ""
        assert config.store.database == "neo4j"
        assert config.store.max_connection_pool_size == 50
        assert config.store.populate_on_start is False
        assert config.catalog.paths == []
        assert config.api.port == 8080
        assert config.log.level == "info"


class TestOverrides:
    def test_neo4j_connection(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_STORE_BACKEND", "NEO4J")
        monkeypatch.setenv("VARGRAPH_NEO4J_PROTOCOL", "neo4j+s")
        monkeypatch.setenv("VARGRAPH_NEO4J_HOST", "graph.internal")
        monkeypatch.setenv("VARGRAPH_NEO4J_PORT", "7688")
        monkeypatch.setenv("VARGRAPH_NEO4J_PASSWORD", "secret")
        monkeypatch.setenv("VARGRAPH_NEO4J_DATABASE", "umm-var")
        monkeypatch.setenv("VARGRAPH_NEO4J_POPULATE_ON_START", "yes")
        config = load_config()
        assert config.store.backend == "neo4j"
        assert config.store.uri == "neo4j+s://graph.internal:7688"
        assert config.store.password == "secret"
        assert config.store.database == "umm-var"
        assert config.store.populate_on_start is True

    def test_catalog_paths_split_on_commas(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_CATALOG_PATHS", "a.json, b.json,,")
        assert load_config().catalog.paths == ["a.json", "b.json"]

    def test_pool_size_is_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_NEO4J_POOL_SIZE", "0")
        assert load_config().store.max_connection_pool_size == 1
        monkeypatch.setenv("VARGRAPH_NEO4J_POOL_SIZE", "10000")
        assert load_config().store.max_connection_pool_size == 500

    def test_api_port_is_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_API_PORT", "80")
        assert load_config().api.port == 1024


class TestValidation:
    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_STORE_BACKEND", "postgres")
        with pytest.raises(ValueError, match="store backend"):
            load_config()

    def test_unknown_protocol_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_NEO4J_PROTOCOL", "http")
        with pytest.raises(ValueError, match="protocol"):
            load_config()

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="log level"):
            load_config()

    def test_non_numeric_port_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VARGRAPH_NEO4J_PORT", "seven")
        with pytest.raises(ValueError):
            load_config()

"""Load :class:`VarGraphConfig` from ``VARGRAPH_*`` environment variables.

Unset variables take the dataclass defaults. Enumerated settings reject
unknown values with ``ValueError``; numeric settings are clamped to their
allowed range.
"""

from __future__ import annotations

import os

from vargraph.models.config import (
    APIConfig,
    CatalogConfig,
    LogConfig,
    StoreConfig,
    VarGraphConfig,
)

_PREFIX = "VARGRAPH_"

_BACKENDS = ("memory", "neo4j")
_PROTOCOLS = ("bolt", "bolt+s", "bolt+ssc", "neo4j", "neo4j+s", "neo4j+ssc")
_LOG_LEVELS = ("debug", "info", "warning", "error")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(_PREFIX + key, default)


def _env_bool(key: str, default: bool = False) -> bool:
    return _env(key, str(default)).strip().lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, lo: int, hi: int) -> int:
    raw = _env(key, str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{_PREFIX}{key} must be an integer, got {raw!r}") from None
    return min(max(value, lo), hi)


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key).split(",") if item.strip()]


def _env_choice(key: str, default: str, allowed: tuple[str, ...], label: str) -> str:
    value = _env(key, default).strip().lower()
    if value not in allowed:
        raise ValueError(f"Invalid {label}: {value!r} ({_PREFIX}{key}); expected one of {', '.join(allowed)}")
    return value


def load_config() -> VarGraphConfig:
    """Build the configuration tree from the current environment."""
    store = StoreConfig(
        backend=_env_choice("STORE_BACKEND", "memory", _BACKENDS, "store backend"),
        protocol=_env_choice("NEO4J_PROTOCOL", "bolt", _PROTOCOLS, "neo4j protocol"),
        host=_env("NEO4J_HOST", "localhost"),
        port=_env_int("NEO4J_PORT", 7687, 1, 65535),
        username=_env("NEO4J_USERNAME", "neo4j"),
        password=_env("NEO4J_PASSWORD"),
        database=_env("NEO4J_DATABASE", "neo4j"),
        max_connection_pool_size=_env_int("NEO4J_POOL_SIZE", 50, 1, 500),
        populate_on_start=_env_bool("NEO4J_POPULATE_ON_START"),
    )
    return VarGraphConfig(
        store=store,
        catalog=CatalogConfig(paths=_env_list("CATALOG_PATHS")),
        api=APIConfig(port=_env_int("API_PORT", 8080, 1024, 65535)),
        log=LogConfig(level=_env_choice("LOG_LEVEL", "info", _LOG_LEVELS, "log level")),
    )

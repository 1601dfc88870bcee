"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class StoreConfig:
    """Graph store backend and connection configuration."""

    backend: str = "memory"
    protocol: str = "bolt"
    host: str = "localhost"
    port: int = 7687
    username: str = "neo4j"
    password: str = ""
    database: str = "neo4j"
    max_connection_pool_size: int = 50
    populate_on_start: bool = False

    @property
    def uri(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


@dataclass
class CatalogConfig:
    """Catalog source configuration.

    An empty ``paths`` list selects the built-in catalogs.
    """

    paths: list[str] = field(default_factory=list)


@dataclass
class APIConfig:
    """REST API configuration."""

    port: int = 8080


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class VarGraphConfig:
    """Top-level vargraph configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)

"""Graph store adapters for vargraph.

Exports:
    GraphStore          -- Abstract read interface every backend implements.
    InMemoryGraphStore  -- Walks an in-process CatalogGraph.
    Neo4jGraphStore     -- Variable-length REQUIRES match against Neo4j.
    build_graph_store   -- Factory used by the application bootstrap and CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from vargraph.graph.catalog_graph import CatalogGraph
from vargraph.store.base import CypherQuery, GraphStore, ResultsCallback, extract_variable_results
from vargraph.store.memory import InMemoryGraphStore

if TYPE_CHECKING:
    from vargraph.models.catalog import Catalog
    from vargraph.models.config import StoreConfig

_log = structlog.get_logger(component="store")

__all__ = [
    "CypherQuery",
    "GraphStore",
    "InMemoryGraphStore",
    "ResultsCallback",
    "build_graph_store",
    "extract_variable_results",
]


def build_graph_store(config: StoreConfig, catalogs: Sequence[Catalog]) -> GraphStore:
    """Build the store selected by ``config.backend``.

    The memory backend is loaded from *catalogs* immediately. The neo4j
    backend only opens its driver; loading it is an explicit ``populate``.
    """
    if config.backend == "neo4j":
        # Imported lazily: only this backend needs the neo4j driver.
        from vargraph.store.neo4j import Neo4jGraphStore

        return Neo4jGraphStore.from_config(config)

    _log.debug("building memory store", catalogs=len(catalogs))
    return InMemoryGraphStore(CatalogGraph(catalogs))

"""Shared fixtures for vargraph integration tests.

Wires the built-in catalogs through a real in-memory store and resolver so
integration tests exercise the full request → closure → merge pipeline
without a Neo4j server.
"""

from __future__ import annotations

import pytest

from vargraph.catalog import BUILTIN_CATALOGS
from vargraph.graph import CatalogGraph
from vargraph.resolver import ClosureResolver
from vargraph.store import InMemoryGraphStore


@pytest.fixture
def catalog_graph() -> CatalogGraph:
    return CatalogGraph(BUILTIN_CATALOGS)


@pytest.fixture
def memory_store(catalog_graph: CatalogGraph) -> InMemoryGraphStore:
    return InMemoryGraphStore(catalog_graph)


@pytest.fixture
def resolver(memory_store: InMemoryGraphStore) -> ClosureResolver:
    return ClosureResolver(memory_store)

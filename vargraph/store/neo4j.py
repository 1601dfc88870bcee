"""Neo4j-backed graph store.

One AsyncDriver (and therefore one connection pool) is created when the
store is built and reused by every query until ``close()``. Each closure
query runs in its own managed read transaction; ``populate`` writes all
catalogs in a single write transaction that either commits entirely or
rolls back.

Graph layout::

    (:Collection {ConceptId, Name})-[:HASVARIABLE]->(:Variable {ConceptId, DataType, Name})
    (:Variable)-[:REQUIRES]->(:Variable)
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Any

import structlog
from neo4j import READ_ACCESS, WRITE_ACCESS, AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from vargraph.errors import StoreUnavailableError
from vargraph.graph.catalog_graph import CatalogGraph
from vargraph.graph.models import EdgeType
from vargraph.models.catalog import Catalog, Variable
from vargraph.models.config import StoreConfig
from vargraph.store.base import (
    CypherQuery,
    GraphStore,
    ResultsCallback,
    extract_variable_results,
    required_variables_query,
)

_log = structlog.get_logger(component="store.neo4j")

_CLEAR_QUERY = "MATCH (vertex) DETACH DELETE vertex"

_CREATE_COLLECTION_QUERY = f"""\
CREATE (collection:Collection {{ConceptId: $conceptId, Name: $name}})
WITH collection
UNWIND $variables AS variable
CREATE (collection)-[:{EdgeType.HAS_VARIABLE}]->(:Variable {{
  ConceptId: variable.conceptId, DataType: variable.dataType, Name: variable.name
}})"""

_CREATE_REQUIRES_QUERY = f"""\
UNWIND $edges AS edge
MATCH (origin:Variable {{ConceptId: edge.origin}}), (destination:Variable {{ConceptId: edge.destination}})
MERGE (origin)-[:{EdgeType.REQUIRES}]->(destination)"""

# Connection-level and server-side failures; both mean the query did not complete.
_STORE_ERRORS = (Neo4jError, DriverError, OSError)


async def _run_read(tx: Any, query: CypherQuery, results_callback: ResultsCallback) -> list[Variable]:
    result = await tx.run(query.text, dict(query.parameters))
    rows = await result.data()
    return results_callback(rows)


async def _run_writes(tx: Any, queries: Sequence[CypherQuery]) -> None:
    for query in queries:
        result = await tx.run(query.text, dict(query.parameters))
        await result.consume()


def _populate_queries(catalogs: Sequence[Catalog]) -> list[CypherQuery]:
    """Build the write queries for *catalogs*, validating them first."""
    graph = CatalogGraph(catalogs)
    queries = [CypherQuery(_CLEAR_QUERY)]
    for catalog in catalogs:
        queries.append(
            CypherQuery(
                _CREATE_COLLECTION_QUERY,
                {
                    "conceptId": catalog.id,
                    "name": catalog.name,
                    "variables": [
                        {"conceptId": v.id, "dataType": v.data_type, "name": v.name} for v in catalog.variables
                    ],
                },
            )
        )
        edges = [
            {"origin": origin, "destination": destination}
            for origin in catalog.variable_ids
            for destination in graph.requires(origin)
        ]
        if edges:
            queries.append(CypherQuery(_CREATE_REQUIRES_QUERY, {"edges": edges}))
    return queries


class Neo4jGraphStore(GraphStore):
    """Closure queries answered by a variable-length REQUIRES match in Neo4j.

    Args:
        driver:           A shared AsyncDriver. The store owns it and closes it.
        database:         Logical database name for every session.
        results_callback: Maps result rows to Variables.
    """

    def __init__(
        self,
        driver: AsyncDriver,
        database: str = "neo4j",
        results_callback: ResultsCallback = extract_variable_results,
    ) -> None:
        self._driver = driver
        self._database = database
        self._results_callback = results_callback

    @classmethod
    def from_config(cls, config: StoreConfig) -> Neo4jGraphStore:
        """Create the process-wide driver described by *config*."""
        driver = AsyncGraphDatabase.driver(
            config.uri,
            auth=(config.username, config.password),
            max_connection_pool_size=config.max_connection_pool_size,
        )
        _log.info("neo4j_driver_created", uri=config.uri, database=config.database)
        return cls(driver, database=config.database)

    @property
    def backend_name(self) -> str:
        return "neo4j"

    async def resolve_closure(self, seed_ids: Collection[str]) -> list[Variable]:
        query = required_variables_query(seed_ids)
        try:
            async with self._driver.session(database=self._database, default_access_mode=READ_ACCESS) as session:
                return await session.execute_read(_run_read, query, self._results_callback)
        except _STORE_ERRORS as exc:
            _log.error("store_query_failed", backend=self.backend_name, seeds=len(seed_ids), error=str(exc))
            raise StoreUnavailableError(self.backend_name, exc) from exc

    async def populate(self, catalogs: Sequence[Catalog]) -> None:
        queries = _populate_queries(catalogs)
        try:
            async with self._driver.session(database=self._database, default_access_mode=WRITE_ACCESS) as session:
                await session.execute_write(_run_writes, queries)
        except _STORE_ERRORS as exc:
            _log.error("store_populate_failed", backend=self.backend_name, error=str(exc))
            raise StoreUnavailableError(self.backend_name, exc) from exc
        _log.info(
            "neo4j_store_populated",
            catalogs=[catalog.name for catalog in catalogs],
            queries=len(queries),
        )

    async def health_check(self) -> bool:
        try:
            await self._driver.verify_connectivity()
        except _STORE_ERRORS as exc:
            _log.warning("store_health_check_failed", backend=self.backend_name, error=str(exc))
            return False
        return True

    async def close(self) -> None:
        await self._driver.close()
        _log.info("neo4j_driver_closed")

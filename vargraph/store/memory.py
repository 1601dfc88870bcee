"""In-process graph store backed by a CatalogGraph."""

from __future__ import annotations

from collections.abc import Collection, Sequence

import structlog

from vargraph.graph.catalog_graph import CatalogGraph
from vargraph.graph.traversal import reachable
from vargraph.models.catalog import Catalog, Variable
from vargraph.store.base import GraphStore

_log = structlog.get_logger(component="store.memory")


class InMemoryGraphStore(GraphStore):
    """Answers closure queries by walking a CatalogGraph directly.

    ``populate`` builds a complete new graph before swapping it in, so
    readers always see either the old or the new graph, never a mix.
    """

    def __init__(self, graph: CatalogGraph | None = None) -> None:
        self._graph = graph or CatalogGraph()

    @property
    def backend_name(self) -> str:
        return "memory"

    @property
    def graph(self) -> CatalogGraph:
        return self._graph

    async def resolve_closure(self, seed_ids: Collection[str]) -> list[Variable]:
        graph = self._graph
        unknown = [vid for vid in seed_ids if vid not in graph]
        if unknown:
            _log.debug("unknown_seed_ids_ignored", seed_ids=unknown)
        ids = reachable(seed_ids, graph.requires)
        # Every reachable id is an edge destination, so it is always defined.
        return [Variable(id=vid, name=graph.get(vid).name) for vid in ids]  # type: ignore[union-attr]

    async def populate(self, catalogs: Sequence[Catalog]) -> None:
        graph = CatalogGraph(catalogs)
        self._graph = graph
        _log.info("memory_store_populated", nodes=graph.node_count, edges=graph.edge_count)

"""Variable dependency graph and transitive-closure traversal.

Provides an immutable in-memory graph built from catalog definitions
(variables plus "requires" edges) and the breadth-first closure used to
find every variable a request transitively depends on.
"""

from vargraph.graph.catalog_graph import CatalogGraph
from vargraph.graph.models import ClosureResult, EdgeType
from vargraph.graph.traversal import reachable

__all__ = [
    "CatalogGraph",
    "ClosureResult",
    "EdgeType",
    "reachable",
]

"""In-memory dependency graph built from one or more catalogs.

The graph is built once, validated eagerly, and read-only afterwards, so any
number of concurrent resolutions may read it without locking. A reload
builds a new CatalogGraph rather than editing an existing one.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

import structlog

from vargraph.errors import CatalogIntegrityError
from vargraph.models.catalog import Catalog, Variable

_log = structlog.get_logger(component="graph.catalog_graph")


class CatalogGraph:
    """Variable lookup and adjacency view over a fixed set of catalogs.

    Raises CatalogIntegrityError on construction if any catalog is
    malformed: an edge index outside its variable list, an empty variable
    id or name, a variable id defined twice (in any catalogs), a variable
    name repeated within one catalog, or a repeated collection id.
    """

    def __init__(self, catalogs: Iterable[Catalog] = ()) -> None:
        catalog_map: dict[str, Catalog] = {}
        variables: dict[str, Variable] = {}
        owners: dict[str, str] = {}
        adjacency: dict[str, tuple[str, ...]] = {}
        edge_count = 0

        for catalog in catalogs:
            if not catalog.id:
                raise CatalogIntegrityError(catalog.name or "<unnamed>", "collection id is empty")
            if catalog.id in catalog_map:
                raise CatalogIntegrityError(catalog.id, "collection defined more than once")
            catalog_map[catalog.id] = catalog

            names: set[str] = set()
            for variable in catalog.variables:
                if not variable.id or not variable.name:
                    raise CatalogIntegrityError(catalog.id, f"variable with empty id or name: {variable!r}")
                if variable.id in variables:
                    raise CatalogIntegrityError(
                        catalog.id,
                        f"variable id {variable.id} already defined in {owners[variable.id]}",
                    )
                if variable.name in names:
                    raise CatalogIntegrityError(catalog.id, f"variable name {variable.name} is not unique")
                names.add(variable.name)
                variables[variable.id] = variable
                owners[variable.id] = catalog.id

            requires: dict[str, dict[str, None]] = {vid: {} for vid in catalog.variable_ids}
            size = len(catalog.variables)
            for edge in catalog.edges:
                for index in (edge.origin_index, edge.destination_index):
                    if not 0 <= index < size:
                        raise CatalogIntegrityError(
                            catalog.id,
                            f"edge {edge.origin_index}->{edge.destination_index} references "
                            f"undefined variable index {index}",
                        )
                origin = catalog.variables[edge.origin_index].id
                destination = catalog.variables[edge.destination_index].id
                if destination not in requires[origin]:
                    requires[origin][destination] = None
                    edge_count += 1

            for origin, destinations in requires.items():
                adjacency[origin] = tuple(destinations)

        self._catalogs = MappingProxyType(catalog_map)
        self._variables = MappingProxyType(variables)
        self._owners = MappingProxyType(owners)
        self._adjacency = MappingProxyType(adjacency)
        self._edge_count = edge_count

        _log.debug(
            "catalog_graph_built",
            catalogs=len(catalog_map),
            nodes=len(variables),
            edges=edge_count,
        )

    def __contains__(self, variable_id: object) -> bool:
        return variable_id in self._variables

    def get(self, variable_id: str) -> Variable | None:
        """Return the variable with *variable_id*, or None if unknown."""
        return self._variables.get(variable_id)

    def requires(self, variable_id: str) -> tuple[str, ...]:
        """Return ids directly required by *variable_id*, in edge definition order.

        Unknown ids require nothing.
        """
        return self._adjacency.get(variable_id, ())

    def collection_of(self, variable_id: str) -> str | None:
        return self._owners.get(variable_id)

    def catalog(self, collection_id: str) -> Catalog | None:
        return self._catalogs.get(collection_id)

    @property
    def catalogs(self) -> list[Catalog]:
        return list(self._catalogs.values())

    @property
    def node_count(self) -> int:
        return len(self._variables)

    @property
    def edge_count(self) -> int:
        """Number of distinct requires edges (duplicates collapsed)."""
        return self._edge_count

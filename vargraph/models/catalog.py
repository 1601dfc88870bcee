"""Catalog data structures: variables, dependency edges and catalogs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Variable:
    """One addressable field in a dataset."""

    id: str  # concept ID, e.g. "V1238395077-EEDTEST"
    name: str  # path or label, unique within its catalog
    data_type: str = ""  # informational only; empty when read back from a store row


@dataclass(frozen=True)
class DependencyEdge:
    """Directed "origin requires destination" relation.

    Both ends are positions in the owning catalog's ``variables`` sequence.
    """

    origin_index: int
    destination_index: int


@dataclass(frozen=True)
class Catalog:
    """Static definition of one collection's variables and their requires edges.

    Immutable: a Catalog owns its variables and edges and is never edited
    after construction. Integrity is checked when a CatalogGraph is built.
    """

    id: str
    name: str
    variables: tuple[Variable, ...] = field(default_factory=tuple)
    edges: tuple[DependencyEdge, ...] = field(default_factory=tuple)

    @property
    def variable_ids(self) -> tuple[str, ...]:
        return tuple(variable.id for variable in self.variables)

"""Data structures for the variable dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from vargraph.models.catalog import Variable


class EdgeType(StrEnum):
    """Relationship labels used when a catalog is written to a graph store."""

    HAS_VARIABLE = "HASVARIABLE"  # Collection -> Variable
    REQUIRES = "REQUIRES"  # Variable -> Variable it cannot be processed without


@dataclass
class ClosureResult:
    """Result of resolving the required variables for a set of seeds."""

    seed_ids: tuple[str, ...] = ()
    variables: list[Variable] = field(default_factory=list)
    backend: str = ""
    skipped: bool = False  # True when no store call was made (empty seed set)

    @property
    def variable_ids(self) -> list[str]:
        return [variable.id for variable in self.variables]

"""Graph store interface and the query templates shared by backends.

GraphStore       -- ABC every backend implements.
CypherQuery      -- A query template plus its bound parameters.
ResultsCallback  -- Maps query result rows to Variables.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from vargraph.models.catalog import Catalog, Variable

ResultsCallback = Callable[[Sequence[Mapping[str, Any]]], list[Variable]]


@dataclass(frozen=True)
class CypherQuery:
    """A parameterised query: template text plus bound values.

    Identifiers are always passed through ``parameters``; they are never
    interpolated into ``text``.
    """

    text: str
    parameters: Mapping[str, Any] = field(default_factory=dict)


REQUIRED_VARIABLES_QUERY = """\
MATCH (requestedVariable:Variable)-[:REQUIRES*1..]->(requiredVariable:Variable)
WHERE requestedVariable.ConceptId IN $requestedVariableConceptIds
RETURN DISTINCT requiredVariable.ConceptId AS ConceptId, requiredVariable.Name AS Name
ORDER BY ConceptId"""


def required_variables_query(seed_ids: Collection[str]) -> CypherQuery:
    """Build the closure query for *seed_ids*."""
    return CypherQuery(
        text=REQUIRED_VARIABLES_QUERY,
        parameters={"requestedVariableConceptIds": list(seed_ids)},
    )


def extract_variable_results(rows: Sequence[Mapping[str, Any]]) -> list[Variable]:
    """Map ``ConceptId``/``Name`` rows to Variables, keeping the first of any repeated id."""
    seen: set[str] = set()
    variables: list[Variable] = []
    for row in rows:
        concept_id = str(row["ConceptId"])
        if concept_id in seen:
            continue
        seen.add(concept_id)
        variables.append(Variable(id=concept_id, name=str(row.get("Name") or "")))
    return variables


class GraphStore(ABC):
    """Narrow read interface onto a graph-capable backing store.

    ``resolve_closure`` must satisfy the reachability semantics of
    ``vargraph.graph.traversal.reachable``: every variable reachable from a
    seed by one or more REQUIRES edges, deduplicated. Failures raise
    StoreUnavailableError; they are never reported as an empty result.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Short backend identifier used in metrics and logs."""

    @abstractmethod
    async def resolve_closure(self, seed_ids: Collection[str]) -> list[Variable]:
        """Return the variables transitively required by *seed_ids*."""

    @abstractmethod
    async def populate(self, catalogs: Sequence[Catalog]) -> None:
        """Replace the store contents with *catalogs*.

        Only called at startup or on explicit reload, never while serving
        requests.
        """

    async def health_check(self) -> bool:
        """Return True if the store can currently answer queries."""
        return True

    async def close(self) -> None:
        """Release any connections held by the store."""

"""Request-scoped structures describing the variables a caller asked for."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VariableDescriptor:
    """A requested (or appended required) variable: identifier plus display name."""

    id: str
    name: str = ""


@dataclass(frozen=True)
class VariableInfo:
    """The variables requested from one collection.

    ``variables is None`` means the whole collection was requested, so there
    is nothing to augment. An empty tuple means no variables were named.
    """

    collection_id: str
    variables: tuple[VariableDescriptor, ...] | None = None

    @property
    def variable_ids(self) -> tuple[str, ...]:
        if self.variables is None:
            return ()
        return tuple(descriptor.id for descriptor in self.variables)

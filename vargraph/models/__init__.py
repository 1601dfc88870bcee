"""Core data structures for vargraph."""

from vargraph.models.catalog import Catalog, DependencyEdge, Variable
from vargraph.models.config import VarGraphConfig
from vargraph.models.requests import VariableDescriptor, VariableInfo

__all__ = [
    "Catalog",
    "DependencyEdge",
    "VarGraphConfig",
    "Variable",
    "VariableDescriptor",
    "VariableInfo",
]

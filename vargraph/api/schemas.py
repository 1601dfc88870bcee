"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vargraph.models.requests import VariableDescriptor, VariableInfo


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response."""

    error: str
    detail: str


class VariableRef(BaseModel):
    id: str = Field(min_length=1, max_length=256)
    name: str = Field(default="", max_length=1024)


class CollectionVariables(BaseModel):
    """Variables requested from one collection; ``variables: null`` means all of them."""

    collection_id: str = Field(min_length=1, max_length=256)
    variables: list[VariableRef] | None = None

    def to_variable_info(self) -> VariableInfo:
        if self.variables is None:
            return VariableInfo(collection_id=self.collection_id)
        return VariableInfo(
            collection_id=self.collection_id,
            variables=tuple(VariableDescriptor(id=v.id, name=v.name) for v in self.variables),
        )

    @classmethod
    def from_variable_info(cls, var_info: VariableInfo) -> CollectionVariables:
        if var_info.variables is None:
            return cls(collection_id=var_info.collection_id)
        return cls(
            collection_id=var_info.collection_id,
            variables=[VariableRef(id=d.id, name=d.name) for d in var_info.variables],
        )


class AugmentRequest(BaseModel):
    collections: list[CollectionVariables] = Field(max_length=100)


class AugmentResponse(BaseModel):
    collections: list[CollectionVariables]
    added_count: int


class HealthResponse(BaseModel):
    status: str  # "ok" | "degraded"
    backend: str
    store_healthy: bool
    version: str


class CatalogSummary(BaseModel):
    collection_id: str
    name: str
    variable_count: int
    edge_count: int

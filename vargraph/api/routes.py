"""Route handlers for the vargraph REST API.

Dependencies (resolver, store, catalogs) are read from ``request.app.state``,
populated by ``create_app``.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from vargraph.api.schemas import (
    AugmentRequest,
    AugmentResponse,
    CatalogSummary,
    CollectionVariables,
    HealthResponse,
)
from vargraph.resolver.augment import add_required_variables

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    from vargraph import __version__

    store = request.app.state.store
    healthy = await store.health_check()
    return HealthResponse(
        status="ok" if healthy else "degraded",
        backend=store.backend_name,
        store_healthy=healthy,
        version=__version__,
    )


@router.get("/collections", response_model=list[CatalogSummary])
async def collections(request: Request) -> list[CatalogSummary]:
    return [
        CatalogSummary(
            collection_id=catalog.id,
            name=catalog.name,
            variable_count=len(catalog.variables),
            edge_count=len(catalog.edges),
        )
        for catalog in request.app.state.catalogs
    ]


@router.post("/variables/augment", response_model=AugmentResponse)
async def augment_variables(body: AugmentRequest, request: Request) -> AugmentResponse:
    """Append every transitively required variable to each requested collection."""
    var_infos = [item.to_variable_info() for item in body.collections]
    augmented = await add_required_variables(var_infos, request.app.state.resolver)

    added_count = sum(
        len(after.variables or ()) - len(before.variables or ())
        for before, after in zip(var_infos, augmented, strict=True)
    )
    return AugmentResponse(
        collections=[CollectionVariables.from_variable_info(v) for v in augmented],
        added_count=added_count,
    )

"""FastAPI application factory for vargraph.

``create_app`` is called once by the bootstrap (``vargraph.app``) with the
process-wide resolver and store; tests call it with fakes. Every error is
answered with the :class:`ErrorResponse` envelope:

    400 INVALID_REQUEST    body failed validation or named an empty id
    503 STORE_UNAVAILABLE  the graph store could not answer; retry later
    500 INTERNAL_ERROR     anything else
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from vargraph.api.routes import router
from vargraph.api.schemas import ErrorResponse
from vargraph.errors import InvalidRequestError, StoreUnavailableError
from vargraph.models.catalog import Catalog
from vargraph.models.config import VarGraphConfig
from vargraph.resolver.closure import ClosureResolver
from vargraph.store.base import GraphStore

_log = structlog.get_logger(component="api.app")

_STORE_UNAVAILABLE_DETAIL = "Required variables could not be resolved; retry the request."


def _envelope(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error, detail=detail).model_dump())


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """``collections.0.variables.1.id: String should have at least 1 character``"""
    errors = exc.errors()
    if not errors:
        return "Malformed request body."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg', '')}" if location else str(first.get("msg", ""))


async def _on_validation_error(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    return _envelope(400, "INVALID_REQUEST", _describe_validation_errors(exc))


async def _on_invalid_request(_request: Request, exc: Exception) -> JSONResponse:
    return _envelope(400, "INVALID_REQUEST", str(exc))


async def _on_store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    # No partial result is ever returned; the driver error stays in the logs
    assert isinstance(exc, StoreUnavailableError)
    _log.warning("store_unavailable", path=request.url.path, backend=exc.backend)
    return _envelope(503, "STORE_UNAVAILABLE", _STORE_UNAVAILABLE_DETAIL)


async def _on_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    _log.error("unhandled_exception", path=request.url.path, method=request.method, error=repr(exc))
    return _envelope(500, "INTERNAL_ERROR", "An unexpected error occurred.")


def create_app(
    resolver: ClosureResolver,
    store: GraphStore,
    config: VarGraphConfig | None = None,
    catalogs: Sequence[Catalog] | None = None,
) -> FastAPI:
    """Build the REST application around an already started resolver and store.

    ``catalogs`` feeds ``/api/v1/collections``; ``config`` is kept on
    ``app.state`` for handlers that need it.
    """
    from vargraph import __version__

    app = FastAPI(
        title="vargraph",
        summary="Required-variable resolution API",
        version=__version__,
        description=(
            "Appends every coordinate, dimension and subset-control variable a "
            "requested variable transitively depends on."
        ),
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )
    app.state.resolver = resolver
    app.state.store = store
    app.state.config = config
    app.state.catalogs = list(catalogs or ())

    app.include_router(router, prefix="/api/v1")
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(InvalidRequestError, _on_invalid_request)
    app.add_exception_handler(StoreUnavailableError, _on_store_unavailable)
    app.add_exception_handler(Exception, _on_unexpected_error)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app

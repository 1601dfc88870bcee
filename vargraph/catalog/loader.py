"""Load catalog definitions from JSON documents.

A document is either one catalog object or a list of them::

    {
      "conceptId": "C1238392622-EEDTEST",
      "name": "RSSMIF16D",
      "variables": [{"conceptId": "V...", "dataType": "int16", "name": "rainfall_rate"}],
      "variableEdges": [{"originIndex": 2, "destinationIndex": 1}]
    }

Structural problems raise CatalogIntegrityError; cross-reference checks
(edge indices, duplicate ids) happen when the CatalogGraph is built.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from vargraph.catalog.fixtures import BUILTIN_CATALOGS
from vargraph.errors import CatalogIntegrityError
from vargraph.models.catalog import Catalog, DependencyEdge, Variable

_log = structlog.get_logger(component="catalog.loader")


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Build a Catalog from its JSON representation."""
    if not isinstance(data, dict):
        raise CatalogIntegrityError("<unknown>", "catalog document must be an object")
    collection_id = str(data.get("conceptId", ""))
    try:
        variables = tuple(
            Variable(
                id=str(item["conceptId"]),
                name=str(item["name"]),
                data_type=str(item.get("dataType", "")),
            )
            for item in data.get("variables", [])
        )
        edges = tuple(
            DependencyEdge(
                origin_index=int(item["originIndex"]),
                destination_index=int(item["destinationIndex"]),
            )
            for item in data.get("variableEdges", [])
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise CatalogIntegrityError(collection_id or "<unknown>", f"malformed entry: {exc!r}") from exc

    return Catalog(
        id=collection_id,
        name=str(data.get("name", "")),
        variables=variables,
        edges=edges,
    )


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    """Serialise *catalog* to the JSON representation read by catalog_from_dict."""
    return {
        "conceptId": catalog.id,
        "name": catalog.name,
        "variables": [
            {"conceptId": v.id, "dataType": v.data_type, "name": v.name} for v in catalog.variables
        ],
        "variableEdges": [
            {"originIndex": e.origin_index, "destinationIndex": e.destination_index} for e in catalog.edges
        ],
    }


def load_catalog_file(path: str | Path) -> list[Catalog]:
    """Read every catalog defined in the JSON file at *path*."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogIntegrityError(str(path), f"cannot read file: {exc.strerror or exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogIntegrityError(str(path), f"invalid JSON: {exc}") from exc

    items = document if isinstance(document, list) else [document]
    catalogs = [catalog_from_dict(item) for item in items]
    _log.info("catalog_file_loaded", path=str(path), catalogs=len(catalogs))
    return catalogs


def load_catalogs(paths: Iterable[str | Path] = ()) -> list[Catalog]:
    """Load catalogs from *paths*, or the built-in catalogs when none are given."""
    paths = list(paths)
    if not paths:
        return list(BUILTIN_CATALOGS)
    catalogs: list[Catalog] = []
    for path in paths:
        catalogs.extend(load_catalog_file(path))
    return catalogs

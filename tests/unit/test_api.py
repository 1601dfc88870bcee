"""Unit tests for the REST API.

Uses the real resolver over an in-memory store for the happy paths and a
mocked store for failure mapping. Every error response must carry the
``error`` + ``detail`` envelope and never a stack trace.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from hypothesis import given, settings
from hypothesis import strategies as st

from vargraph.api.app import create_app
from vargraph.catalog import BUILTIN_CATALOGS, RSSMIF16D
from vargraph.errors import StoreUnavailableError
from vargraph.graph import CatalogGraph
from vargraph.resolver import ClosureResolver
from vargraph.store import InMemoryGraphStore

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _make_client(store: object | None = None) -> TestClient:
    store = store or InMemoryGraphStore(CatalogGraph(BUILTIN_CATALOGS))
    app = create_app(
        resolver=ClosureResolver(store),  # type: ignore[arg-type]
        store=store,  # type: ignore[arg-type]
        catalogs=list(BUILTIN_CATALOGS),
    )
    return TestClient(app, raise_server_exceptions=False)


def _failing_store(error: Exception) -> MagicMock:
    store = MagicMock()
    store.backend_name = "neo4j"
    store.resolve_closure = AsyncMock(side_effect=error)
    store.health_check = AsyncMock(return_value=False)
    return store


def _body(*variable_ids: str, collection_id: str = RSSMIF16D.id) -> dict:
    return {"collections": [{"collection_id": collection_id, "variables": [{"id": v} for v in variable_ids]}]}


# ---------------------------------------------------------------------------
# Augment
# ---------------------------------------------------------------------------


class TestAugmentEndpoint:
    def test_rainfall_rate_gets_grid_variables(self) -> None:
        response = _make_client().post("/api/v1/variables/augment", json=_body("V1238395077-EEDTEST"))
        assert response.status_code == 200
        data = response.json()
        assert data["added_count"] == 3
        names = [v["name"] for v in data["collections"][0]["variables"]]
        assert names == ["", "latitude", "longitude", "time"]

    def test_requested_names_preserved(self) -> None:
        body = {
            "collections": [
                {
                    "collection_id": RSSMIF16D.id,
                    "variables": [{"id": "V1238395077-EEDTEST", "name": "rainfall_rate"}],
                }
            ]
        }
        data = _make_client().post("/api/v1/variables/augment", json=body).json()
        assert data["collections"][0]["variables"][0] == {"id": "V1238395077-EEDTEST", "name": "rainfall_rate"}

    def test_null_variables_pass_through(self) -> None:
        body = {"collections": [{"collection_id": RSSMIF16D.id, "variables": None}]}
        data = _make_client().post("/api/v1/variables/augment", json=body).json()
        assert data == {"collections": [{"collection_id": RSSMIF16D.id, "variables": None}], "added_count": 0}

    def test_empty_request(self) -> None:
        data = _make_client().post("/api/v1/variables/augment", json={"collections": []}).json()
        assert data == {"collections": [], "added_count": 0}

    def test_missing_identifier_is_400(self) -> None:
        body = {"collections": [{"collection_id": RSSMIF16D.id, "variables": [{"name": "latitude"}]}]}
        response = _make_client().post("/api/v1/variables/augment", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    def test_empty_identifier_is_400(self) -> None:
        response = _make_client().post("/api/v1/variables/augment", json=_body(""))
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    def test_store_unavailable_is_503(self) -> None:
        store = _failing_store(StoreUnavailableError("neo4j", "connection refused"))
        response = _make_client(store).post("/api/v1/variables/augment", json=_body("V1"))
        assert response.status_code == 503
        assert response.json() == {
            "error": "STORE_UNAVAILABLE",
            "detail": "Required variables could not be resolved; retry the request.",
        }

    def test_unexpected_error_is_500_without_trace(self) -> None:
        store = _failing_store(RuntimeError("boom at line 42"))
        response = _make_client(store).post("/api/v1/variables/augment", json=_body("V1"))
        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_ERROR"
        assert "boom" not in response.text


# ---------------------------------------------------------------------------
# Health, collections, metrics
# ---------------------------------------------------------------------------


class TestInfoEndpoints:
    def test_health_ok(self) -> None:
        data = _make_client().get("/api/v1/health").json()
        assert data["status"] == "ok"
        assert data["backend"] == "memory"
        assert data["store_healthy"] is True

    def test_health_degraded(self) -> None:
        store = _failing_store(StoreUnavailableError("neo4j", "down"))
        data = _make_client(store).get("/api/v1/health").json()
        assert data["status"] == "degraded"
        assert data["store_healthy"] is False

    def test_collections(self) -> None:
        data = _make_client().get("/api/v1/collections").json()
        assert {c["name"]: c["variable_count"] for c in data} == {"RSSMIF16D": 8, "ATL08": 12}

    def test_metrics_exposed(self) -> None:
        client = _make_client()
        client.post("/api/v1/variables/augment", json=_body("V1238395077-EEDTEST"))
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "vargraph_closure_requests_total" in response.text


# ---------------------------------------------------------------------------
# Fuzz: malformed bodies never produce a 500
# ---------------------------------------------------------------------------

_json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=20),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=10), children, max_size=4),
    max_leaves=10,
)


class TestFuzz:
    @settings(max_examples=50, deadline=None)
    @given(body=_json_values)
    def test_arbitrary_json_never_500(self, body: object) -> None:
        response = _make_client().post("/api/v1/variables/augment", json=body)
        assert response.status_code in (200, 400)
        assert response.headers["content-type"].startswith("application/json")

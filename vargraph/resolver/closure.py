"""ClosureResolver: resolves required variables for a seed set via a GraphStore.

The resolver holds no mutable state between calls; concurrent resolutions
share only the store. It neither retries nor times out: callers that need
a deadline wrap ``resolve`` in ``asyncio.wait_for``, and cancellation simply
abandons the in-flight store query.
"""

from __future__ import annotations

import time
from collections.abc import Iterable

import structlog

from vargraph.errors import StoreUnavailableError
from vargraph.graph.models import ClosureResult
from vargraph.observability.metrics import closure_duration_seconds, closure_requests_total
from vargraph.store.base import GraphStore

_log = structlog.get_logger(component="resolver.closure")


class ClosureResolver:
    """Computes the variables transitively required by a set of seeds."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    @property
    def store(self) -> GraphStore:
        return self._store

    async def resolve(self, seed_ids: Iterable[str]) -> ClosureResult:
        """Return every variable reachable from *seed_ids* by one or more REQUIRES edges.

        Seeds are de-duplicated in first-seen order. An empty seed set
        returns an empty result without touching the store.

        Raises:
            StoreUnavailableError: the store could not complete the query.
        """
        seeds = tuple(dict.fromkeys(seed_ids))
        backend = self._store.backend_name
        if not seeds:
            closure_requests_total.labels(backend=backend, outcome="skipped").inc()
            return ClosureResult(backend=backend, skipped=True)

        start = time.monotonic()
        try:
            variables = await self._store.resolve_closure(seeds)
        except StoreUnavailableError:
            closure_requests_total.labels(backend=backend, outcome="error").inc()
            raise
        elapsed = time.monotonic() - start

        closure_requests_total.labels(backend=backend, outcome="success").inc()
        closure_duration_seconds.labels(backend=backend).observe(elapsed)
        _log.debug(
            "closure_resolved",
            backend=backend,
            seeds=len(seeds),
            required=len(variables),
            elapsed_ms=round(elapsed * 1000, 2),
        )
        return ClosureResult(seed_ids=seeds, variables=variables, backend=backend)

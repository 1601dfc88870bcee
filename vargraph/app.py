"""Process bootstrap for vargraph.

``VarGraphApp`` brings components up in dependency order:

    config → logging → catalogs → graph store → closure resolver → REST API

The graph store (for neo4j, the driver and its connection pool) is created
once and shared by every request until ``stop()``. Shutdown runs in reverse
order and never raises; a store that fails to close is logged and dropped.
"""

from __future__ import annotations

import asyncio
import signal
from dataclasses import asdict
from typing import TYPE_CHECKING

from vargraph.config import load_config
from vargraph.models.catalog import Catalog
from vargraph.models.config import VarGraphConfig
from vargraph.observability.logging import get_logger, setup_logging

if TYPE_CHECKING:
    import structlog
    import uvicorn

    from vargraph.resolver.closure import ClosureResolver
    from vargraph.store.base import GraphStore

_STORE_CLOSE_TIMEOUT_SECONDS = 15


class StartupError(Exception):
    """A mandatory component could not be brought up."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"vargraph could not start the {component}: {cause}")
        self.component = component
        self.cause = cause


class VarGraphApp:
    """Owns the catalogs, graph store, resolver and REST server of one process.

    ``stop()`` is idempotent and safe on an app that never started.
    """

    def __init__(self, config: VarGraphConfig | None = None) -> None:
        self.config: VarGraphConfig | None = config

        self._catalogs: list[Catalog] = []
        self._store: GraphStore | None = None
        self._resolver: ClosureResolver | None = None
        self._server: uvicorn.Server | None = None
        self._server_task: asyncio.Task[None] | None = None

        self._stopping = False
        self._stopped = asyncio.Event()
        self._log: structlog.stdlib.BoundLogger | None = None

    @property
    def resolver(self) -> ClosureResolver | None:
        return self._resolver

    @property
    def store(self) -> GraphStore | None:
        return self._store

    @property
    def catalogs(self) -> list[Catalog]:
        return self._catalogs

    async def wait_stopped(self) -> None:
        """Block until ``stop()`` has completed."""
        await self._stopped.wait()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self, serve: bool = True) -> None:
        """Bring every component up; ``serve=False`` skips the REST server.

        Raises:
            StartupError: naming the first component that failed.
        """
        if self.config is None:
            self.config = load_config()

        setup_logging(self.config.log.level)
        self._log = get_logger("app")
        self._log.info("vargraph starting", version=_vargraph_version())
        self._log.debug("configuration loaded", **asdict(self.config))
        self._stopping = False
        self._stopped.clear()

        self._load_catalogs()
        await self._open_store()
        self._build_resolver()
        if serve:
            self._serve_rest()

        self._log.info(
            "vargraph started",
            backend=self.config.store.backend,
            collections=len(self._catalogs),
            rest_port=self.config.api.port if serve else None,
        )

    def _load_catalogs(self) -> None:
        """Load catalog files (or the built-ins) and validate them as one graph."""
        assert self._log is not None
        assert self.config is not None
        from vargraph.catalog import load_catalogs
        from vargraph.graph import CatalogGraph

        try:
            catalogs = load_catalogs(self.config.catalog.paths)
            graph = CatalogGraph(catalogs)
        except Exception as exc:
            raise StartupError("catalogs", exc) from exc

        self._catalogs = catalogs
        self._log.info(
            "catalogs loaded",
            collections=[catalog.name for catalog in catalogs],
            variables=graph.node_count,
            requires_edges=graph.edge_count,
        )

    async def _open_store(self) -> None:
        assert self._log is not None
        assert self.config is not None
        from vargraph.store import build_graph_store

        try:
            self._store = build_graph_store(self.config.store, self._catalogs)
        except Exception as exc:
            raise StartupError("graph store", exc) from exc

        if self.config.store.backend == "neo4j" and self.config.store.populate_on_start:
            try:
                await self._store.populate(self._catalogs)
            except Exception as exc:
                # Existing graph contents remain usable
                self._log.warning("populate on start failed; serving existing graph", error=str(exc))

        self._log.info(
            "graph store ready",
            backend=self._store.backend_name,
            reachable=await self._store.health_check(),
        )

    def _build_resolver(self) -> None:
        assert self._store is not None
        from vargraph.resolver.closure import ClosureResolver

        self._resolver = ClosureResolver(self._store)

    def _serve_rest(self) -> None:
        """Run uvicorn as a background task; its exit triggers ``stop()``."""
        assert self._log is not None
        assert self.config is not None
        assert self._resolver is not None
        assert self._store is not None
        import uvicorn

        from vargraph.api import create_app

        try:
            api = create_app(
                resolver=self._resolver,
                store=self._store,
                config=self.config,
                catalogs=self._catalogs,
            )
            self._server = uvicorn.Server(
                uvicorn.Config(
                    app=api,
                    host="0.0.0.0",
                    port=self.config.api.port,
                    log_config=None,
                    access_log=False,
                )
            )
        except Exception as exc:
            raise StartupError("REST API", exc) from exc

        self._server_task = asyncio.create_task(self._server.serve(), name="vargraph-rest")
        self._server_task.add_done_callback(self._on_server_exit)
        self._log.info("rest api listening", port=self.config.api.port)

    def _on_server_exit(self, task: asyncio.Task[None]) -> None:
        if self._stopping or task.cancelled():
            return
        log = self._log or get_logger("app")
        if task.exception() is not None:
            log.error("rest api exited", error=str(task.exception()))
        else:
            log.warning("rest api exited")
        asyncio.get_running_loop().create_task(self.stop(), name="vargraph-stop")

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Stop the REST server, drop the resolver, then close the store."""
        if self._stopping:
            return
        if self._log is None:
            self._stopped.set()
            return
        self._stopping = True

        self._log.info("vargraph shutting down")

        if self._server is not None:
            self._server.should_exit = True
        if self._server_task is not None and not self._server_task.done():
            try:
                await asyncio.wait_for(self._server_task, timeout=_STORE_CLOSE_TIMEOUT_SECONDS)
            except TimeoutError:
                self._log.warning("rest api did not drain in time")
        self._server = None
        self._server_task = None

        self._resolver = None
        await self._close_store()

        self._stopped.set()
        self._log.info("vargraph stopped")

    async def _close_store(self) -> None:
        if self._store is None:
            return
        assert self._log is not None
        store, self._store = self._store, None
        try:
            await asyncio.wait_for(store.close(), timeout=_STORE_CLOSE_TIMEOUT_SECONDS)
        except TimeoutError:
            self._log.warning("graph store close timed out", backend=store.backend_name)
        except Exception as exc:
            self._log.error("graph store close failed", backend=store.backend_name, error=str(exc))


def _vargraph_version() -> str:
    from vargraph import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main() -> None:
    """Serve until SIGTERM/SIGINT or until the REST server exits on its own."""
    app = VarGraphApp()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda: loop.create_task(app.stop(), name="vargraph-stop"))

    try:
        await app.start()
    except StartupError as exc:
        get_logger("app").critical("fatal startup error", component=exc.component, error=str(exc.cause))
        await app.stop()
        raise SystemExit(1) from exc

    await app.wait_stopped()

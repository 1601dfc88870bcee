"""Click command group for vargraph.

Commands run against the backend selected by VARGRAPH_* configuration:

    vargraph catalogs
    vargraph augment V1238395077-EEDTEST
    vargraph populate
    vargraph serve
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click

from vargraph.errors import VarGraphError
from vargraph.models.requests import VariableDescriptor, VariableInfo
from vargraph.observability.logging import setup_logging


async def _with_app(action: Any) -> Any:
    """Start the app without the REST server, run *action(app)*, then stop."""
    from vargraph.app import StartupError, VarGraphApp

    app = VarGraphApp()
    try:
        await app.start(serve=False)
        return await action(app)
    except StartupError as exc:
        raise click.ClickException(str(exc)) from exc
    except VarGraphError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        await app.stop()


@click.group()
@click.version_option(package_name="vargraph")
def cli() -> None:
    """Resolve the variables a dataset request transitively requires."""
    from vargraph.config import load_config

    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    # stdout carries command output only; logs go to stderr
    setup_logging(config.log.level)


@cli.command()
def catalogs() -> None:
    """List the configured catalogs."""
    from vargraph.catalog import load_catalogs
    from vargraph.config import load_config
    from vargraph.graph import CatalogGraph

    try:
        loaded = load_catalogs(load_config().catalog.paths)
        graph = CatalogGraph(loaded)
    except VarGraphError as exc:
        raise click.ClickException(str(exc)) from exc

    for catalog in graph.catalogs:
        click.echo(f"{catalog.id}\t{catalog.name}\t{len(catalog.variables)} variables\t{len(catalog.edges)} edges")


@cli.command()
@click.argument("variable_ids", nargs=-1, required=True)
@click.option("--collection", "collection_id", default="", help="Collection concept ID of the variables.")
def augment(variable_ids: tuple[str, ...], collection_id: str) -> None:
    """Print VARIABLE_IDS plus every variable they transitively require, as JSON."""
    from vargraph.resolver.augment import add_required_variables

    async def _run(app: Any) -> list[VariableInfo]:
        var_info = VariableInfo(
            collection_id=collection_id or _guess_collection(app, variable_ids[0]),
            variables=tuple(VariableDescriptor(id=vid) for vid in variable_ids),
        )
        return await add_required_variables([var_info], app.resolver)

    augmented = asyncio.run(_with_app(_run))
    payload = [
        {
            "collection_id": info.collection_id,
            "variables": [{"id": d.id, "name": d.name} for d in info.variables or ()],
        }
        for info in augmented
    ]
    click.echo(json.dumps(payload, indent=2))


def _guess_collection(app: Any, variable_id: str) -> str:
    from vargraph.graph import CatalogGraph

    owner = CatalogGraph(app.catalogs).collection_of(variable_id)
    if owner is None:
        raise click.UsageError(f"Unknown variable {variable_id}; pass --collection explicitly.")
    return owner


@cli.command()
def populate() -> None:
    """Replace the graph store contents with the configured catalogs."""

    async def _run(app: Any) -> int:
        await app.store.populate(app.catalogs)
        return len(app.catalogs)

    count = asyncio.run(_with_app(_run))
    click.echo(f"Populated {count} catalog(s).")


@cli.command()
def serve() -> None:
    """Run the REST service until interrupted."""
    from vargraph.app import main

    asyncio.run(main())

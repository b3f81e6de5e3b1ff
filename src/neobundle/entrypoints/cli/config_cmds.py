"""NEOBUNDLE config CLI — validate and inspect a bundle configuration.

Behavior
- The configuration path is the PATH argument, or ``NEOBUNDLE_CONFIG``.
- Human-oriented notices go to **stderr**; ``show`` writes its tables (or JSON
  with ``--json``) to **stdout**.
- Passwords are never printed: URLs are rendered with the password masked.

Failure modes
- Missing path → ``ClickException`` with guidance.
- Unreadable file or invalid configuration → ``ClickException`` carrying the
  resolver's message (exit code 1).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
import click_extra as clickx
from rich.console import Console
from rich.table import Table

from neobundle.bootstrap import AppContainer, bootstrap
from neobundle.config import CONFIG_PATH_ENVVAR
from neobundle.domain.errors import NeobundleError

from .helpers import error, success, warn

if TYPE_CHECKING:
    from neobundle.domain.model import ResolvedBundle

MISSING_CONFIG_PATH_MSG = (
    f"No configuration file given and {CONFIG_PATH_ENVVAR} is not set.\n\n"
    "Pass a path, e.g.:\n"
    "  neobundle config check config/neo4j.yaml\n"
    "or set it in the environment:\n"
    f"  export {CONFIG_PATH_ENVVAR}=config/neo4j.yaml"
)


def _resolve(
    path: Path | None, ogm: bool | None, cache_dir: Path | None
) -> AppContainer:
    if path is None:
        raise click.ClickException(MISSING_CONFIG_PATH_MSG)
    try:
        return bootstrap(path, cache_root=cache_dir, ogm=ogm)
    except NeobundleError as e:
        error(f"Configuration {path} is invalid.")
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e.strerror}") from e


def resolve_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every ``config`` subcommand."""
    func = click.option(
        "--cache-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Global cache root for entity managers (default: user cache dir).",
    )(func)
    func = click.option(
        "--ogm/--no-ogm",
        default=None,
        help="Force the OGM capability on or off instead of probing for neomodel.",
    )(func)
    func = click.argument(
        "path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        required=False,
        envvar=CONFIG_PATH_ENVVAR,
    )(func)
    return func


def bundle_as_dict(bundle: ResolvedBundle) -> dict[str, Any]:
    """Return a JSON-ready view of *bundle* (passwords masked)."""
    return {
        "master": bundle.connections.master,
        "connections": {
            name: {
                "scheme": c.scheme.value,
                "host": c.host,
                "port": c.port,
                "username": c.username,
                "url": c.display_url,
            }
            for name, c in bundle.connections.items()
        },
        "clients": {
            name: list(c.connection_names) for name, c in bundle.clients.items()
        },
        "entity_managers": (
            None
            if bundle.entity_managers is None
            else {
                name: {"client": em.client_name, "cache_dir": em.cache_dir}
                for name, em in bundle.entity_managers.items()
            }
        ),
        "aliases": bundle.aliases.as_dict(),
        "profiling": bundle.profiling,
    }


def _render_tables(bundle: ResolvedBundle, console: Console) -> None:
    connections = Table(title="Connections")
    connections.add_column("Name")
    connections.add_column("URL")
    connections.add_column("Master")
    for name, connection in bundle.connections.items():
        is_master = "*" if name == bundle.connections.master else ""
        connections.add_row(name, connection.display_url, is_master)
    console.print(connections)

    clients = Table(title="Clients")
    clients.add_column("Name")
    clients.add_column("Connections")
    for name, client in bundle.clients.items():
        clients.add_row(name, ", ".join(client.connection_names))
    console.print(clients)

    if bundle.entity_managers is not None:
        entity_managers = Table(title="Entity managers")
        entity_managers.add_column("Name")
        entity_managers.add_column("Client")
        entity_managers.add_column("Cache dir")
        for name, em in bundle.entity_managers.items():
            entity_managers.add_row(name, em.client_name, em.cache_dir)
        console.print(entity_managers)
    else:
        console.print("Entity managers: disabled (OGM not installed)")

    aliases = Table(title="Aliases")
    aliases.add_column("Alias")
    aliases.add_column("Target")
    for alias, target in bundle.aliases.as_dict().items():
        aliases.add_row(alias, f"{alias}.{target}")
    console.print(aliases)


@click.group(cls=clickx.ExtraGroup)
def config() -> None:
    """Bundle configuration commands."""


@config.command()
@resolve_options
def check(path: Path | None, ogm: bool | None, cache_dir: Path | None) -> None:
    """Validate a configuration file."""
    bundle = _resolve(path, ogm, cache_dir).bundle
    if bundle.entity_managers is None:
        warn("OGM inactive: entity managers are disabled.")
        entity_managers = "entity managers disabled"
    else:
        entity_managers = f"{len(bundle.entity_managers)} entity manager(s)"
    success(
        f"Configuration OK: {len(bundle.connections)} connection(s), "
        f"{len(bundle.clients)} client(s), {entity_managers}."
    )


@config.command()
@resolve_options
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
def show(
    path: Path | None, ogm: bool | None, cache_dir: Path | None, as_json: bool
) -> None:
    """Print the resolved connections, clients, entity managers and aliases."""
    bundle = _resolve(path, ogm, cache_dir).bundle
    if as_json:
        click.echo(json.dumps(bundle_as_dict(bundle), indent=2))
    else:
        _render_tables(bundle, Console())

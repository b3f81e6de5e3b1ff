"""Flatten a resolved bundle into service ids for an external DI container.

Service ids follow the ``neo4j.<kind>.<name>`` convention, and the convenience
aliases become ``neo4j.<kind>`` ids pointing at ``neo4j.<kind>.default``. The
map only names things; instantiating live drivers or sessions from the
descriptors is up to the container.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from neobundle.domain.model import (
        Client,
        Connection,
        EntityManager,
        ResolvedBundle,
    )

    Descriptor = Connection | Client | EntityManager

PREFIX = "neo4j"  # pragma: no mutate


def service_id(kind: str, name: str) -> str:
    """Return the service id of entry *name* of *kind* (e.g. ``client``)."""
    return f"{PREFIX}.{kind}.{name}"


@dataclass(frozen=True)
class ServiceMap:
    """Service definitions, aliases and parameters handed to a container."""

    services: Mapping[str, Descriptor]
    aliases: Mapping[str, str]
    parameters: Mapping[str, Any]


def build_service_map(bundle: ResolvedBundle) -> ServiceMap:
    """Build the service map of *bundle*.

    Parameters set:
    - ``neo4j.connections``: connection name -> service id.
    - ``neo4j.master``: name of the master connection.
    - ``neo4j.profiling``: the profiling toggle.
    - ``neo4j.entity_managers``: list of entity-manager service ids (only when
      entity managers are active).
    - ``neo4j.cache_dir``: cache dir of the last entity manager (only when
      entity managers are active).
    """
    services: dict[str, Descriptor] = {}
    aliases: dict[str, str] = {}
    parameters: dict[str, Any] = {}

    connection_ids = {}
    for name, connection in bundle.connections.items():
        connection_ids[name] = service_id("connection", name)
        services[connection_ids[name]] = connection
    parameters[f"{PREFIX}.connections"] = connection_ids
    parameters[f"{PREFIX}.master"] = bundle.connections.master

    for name, client in bundle.clients.items():
        services[service_id("client", name)] = client

    if bundle.entity_managers is not None:
        entity_manager_ids = []
        for name, entity_manager in bundle.entity_managers.items():
            entity_manager_ids.append(service_id("entity_manager", name))
            services[entity_manager_ids[-1]] = entity_manager
            parameters[f"{PREFIX}.cache_dir"] = entity_manager.cache_dir
        parameters[f"{PREFIX}.entity_managers"] = entity_manager_ids

    for kind, target in bundle.aliases.as_dict().items():
        aliases[f"{PREFIX}.{kind}"] = service_id(kind, target)

    parameters[f"{PREFIX}.profiling"] = bundle.profiling

    return ServiceMap(
        services=MappingProxyType(services),
        aliases=MappingProxyType(aliases),
        parameters=MappingProxyType(parameters),
    )

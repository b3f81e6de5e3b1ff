"""Run the resolution stages in order over a parsed configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from neobundle.config import BundleConfig
from neobundle.domain.model import ResolvedBundle

from .resolvers import (
    bind_aliases,
    check_capability,
    resolve_clients,
    resolve_connections,
    resolve_entity_managers,
)

logger = logging.getLogger(__name__)


def resolve_bundle(
    config: BundleConfig, *, ogm_installed: bool, cache_root: Path | str
) -> ResolvedBundle:
    """Resolve a configuration into connection, client and entity-manager registries.

    The stages run strictly in order: connections, clients, capability check,
    entity managers, aliases. The first error aborts the pass; no partially
    resolved bundle is ever returned.

    Args:
        config: The parsed configuration.
        ogm_installed: Whether the OGM library is available. Computed once by
            the caller (see `neobundle.bootstrap.ogm_installed`).
        cache_root: Global cache root for entity-manager cache directories.

    Returns:
        The resolved bundle.

    Raises:
        ConfigurationError: If any stage rejects the configuration.
    """
    connections = resolve_connections(config.connections)
    clients = resolve_clients(config.clients, connections)
    active = check_capability(ogm_installed, config.entity_managers)
    entity_managers = resolve_entity_managers(
        config.entity_managers, clients, cache_root, active
    )
    aliases = bind_aliases(active)

    logger.info(
        "Resolved %d connection(s) (master: %s), %d client(s), %s",
        len(connections),
        connections.master,
        len(clients),
        (
            f"{len(entity_managers)} entity manager(s)"
            if entity_managers is not None
            else "entity managers disabled"
        ),
    )

    return ResolvedBundle(
        connections=connections,
        clients=clients,
        entity_managers=entity_managers,
        aliases=aliases,
        capability_active=active,
        profiling=config.profiling,
    )

"""Resolution stages: connections, clients, capability, entity managers, aliases.

Each stage consumes the registry produced by the stage before it and returns a
new immutable registry. Stages never mutate their inputs: the ``default``
entries they synthesize are fresh values, never shared with the raw config.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from neobundle.config import ClientConfig, ConnectionConfig, EntityManagerConfig
from neobundle.domain.errors import (
    InvalidConfigurationError,
    MissingCapabilityError,
    UnknownClientReferenceError,
    UnknownConnectionReferenceError,
)
from neobundle.domain.model import (
    DEFAULT_NAME,
    Aliases,
    Client,
    ClientRegistry,
    Connection,
    ConnectionRegistry,
    EntityManager,
    EntityManagerRegistry,
)

logger = logging.getLogger(__name__)

CACHE_SUBDIR = "neo4j"


# ============================================================================
#                           Connections
# ============================================================================


def build_connection(name: str, config: ConnectionConfig) -> Connection:
    """Build a connection, falling back to the scheme's default port."""
    port = config.port if config.port is not None else config.scheme.default_port
    return Connection(
        name=name,
        scheme=config.scheme,
        host=config.host,
        port=port,
        username=config.username,
        password=config.password,
    )


def resolve_connections(
    connections: Mapping[str, ConnectionConfig],
) -> ConnectionRegistry:
    """Build the connection registry and designate the master connection.

    If no connection is named ``default``, the first-declared one is copied
    under that name as well (the original entry is kept). The master is
    ``default`` when declared, otherwise the first-declared connection.

    Args:
        connections: Raw connection entries, in declaration order.

    Returns:
        The connection registry, ``default`` included.

    Raises:
        InvalidConfigurationError: If no connection is declared at all.
    """
    declared = tuple(connections)
    if not declared:
        raise InvalidConfigurationError(
            "connections", "at least one connection must be configured"
        )

    entries = {name: build_connection(name, cfg) for name, cfg in connections.items()}

    first_name = declared[0]
    if DEFAULT_NAME in entries:
        master = DEFAULT_NAME
    else:
        master = first_name
        entries[DEFAULT_NAME] = build_connection(DEFAULT_NAME, connections[first_name])
        logger.debug(
            "No '%s' connection declared; aliasing '%s'", DEFAULT_NAME, first_name
        )

    for connection in entries.values():
        logger.debug("Connection %s -> %s", connection.name, connection.display_url)

    return ConnectionRegistry(entries, master=master, declared=declared)


# ============================================================================
#                           Clients
# ============================================================================


def resolve_clients(
    clients: Mapping[str, ClientConfig], connections: ConnectionRegistry
) -> ClientRegistry:
    """Build the client registry, validating every connection reference.

    Args:
        clients: Raw client entries, in declaration order. When empty, a single
            ``default`` client using the ``default`` connection is synthesized.
        connections: Registry built by `resolve_connections`.

    Returns:
        The client registry.

    Raises:
        UnknownConnectionReferenceError: If a client names an undeclared
            connection.
    """
    if not clients:
        clients = {DEFAULT_NAME: ClientConfig(connections=(DEFAULT_NAME,))}

    entries: dict[str, Client] = {}
    for name, cfg in clients.items():
        names: list[str] = []
        for connection_name in cfg.connections:
            if connection_name not in connections:
                raise UnknownConnectionReferenceError(name, connection_name)
            names.append(connection_name)
        if not names:
            names.append(DEFAULT_NAME)

        # tuple() of a fresh list: each client owns its own sequence
        entries[name] = Client(name=name, connection_names=tuple(names))
        logger.debug("Client %s -> %s", name, ", ".join(names))

    return ClientRegistry(entries)


# ============================================================================
#                           Capability
# ============================================================================


def check_capability(
    ogm_installed: bool, entity_managers: Mapping[str, EntityManagerConfig]
) -> bool:
    """Decide whether entity managers are resolved at all.

    Args:
        ogm_installed: Whether the OGM library is available in the environment.
        entity_managers: Raw entity-manager entries.

    Returns:
        True when entity managers should be resolved.

    Raises:
        MissingCapabilityError: If entity managers are configured but the OGM
            is not installed.
    """
    if not ogm_installed and entity_managers:
        raise MissingCapabilityError
    if ogm_installed and not entity_managers:
        logger.debug("OGM installed; a default entity manager will be configured")
    return ogm_installed


# ============================================================================
#                           Entity managers
# ============================================================================


def resolve_entity_managers(
    entity_managers: Mapping[str, EntityManagerConfig],
    clients: ClientRegistry,
    cache_root: Path | str,
    active: bool,
) -> EntityManagerRegistry | None:
    """Build the entity-manager registry.

    Args:
        entity_managers: Raw entity-manager entries, in declaration order. When
            empty, a single ``default`` entity manager on the ``default`` client
            is synthesized.
        clients: Registry built by `resolve_clients`.
        cache_root: Global cache root; entity managers without an explicit
            ``cache_dir`` use ``<cache_root>/neo4j``.
        active: Result of `check_capability`.

    Returns:
        The entity-manager registry, or None when the capability is inactive.

    Raises:
        UnknownClientReferenceError: If an entity manager names an undeclared
            client.
    """
    if not active:
        return None

    if not entity_managers:
        entity_managers = {DEFAULT_NAME: EntityManagerConfig(client=DEFAULT_NAME)}

    default_cache_dir = str(Path(cache_root) / CACHE_SUBDIR)
    entries: dict[str, EntityManager] = {}
    for name, cfg in entity_managers.items():
        if cfg.client not in clients:
            raise UnknownClientReferenceError(name, cfg.client)
        entries[name] = EntityManager(
            name=name,
            client_name=cfg.client,
            cache_dir=cfg.cache_dir or default_cache_dir,
        )
        logger.debug(
            "Entity manager %s -> client %s (cache %s)",
            name,
            cfg.client,
            entries[name].cache_dir,
        )

    return EntityManagerRegistry(entries)


# ============================================================================
#                           Aliases
# ============================================================================


def bind_aliases(active: bool) -> Aliases:
    """Point the convenience aliases at the ``default`` entries."""
    return Aliases(
        connection=DEFAULT_NAME,
        client=DEFAULT_NAME,
        entity_manager=DEFAULT_NAME if active else None,
    )

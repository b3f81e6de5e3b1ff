"""Configuration utilities for NEOBUNDLE.

This module is the configuration-loading collaborator of the resolver. It turns
a raw configuration tree (usually a YAML document) into typed, defaulted
entries, and centralizes the environment variables and paths NEOBUNDLE reads.

Structural problems (unknown keys, wrong types, unsupported schemes) raise
`InvalidConfigurationError` naming the offending path. Cross-references between
entries are *not* checked here; that is the job of the resolvers.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_cache_dir

from neobundle.domain.errors import ConfigurationError, InvalidConfigurationError
from neobundle.domain.model import Scheme

CONFIG_PATH_ENVVAR = "NEOBUNDLE_CONFIG"  # pragma: no mutate
CACHE_DIR_ENVVAR = "NEOBUNDLE_CACHE_DIR"  # pragma: no mutate
ROOT_KEY = "neo4j"

CONNECTION_KEYS = frozenset({"scheme", "host", "port", "username", "password"})
CLIENT_KEYS = frozenset({"connections"})
ENTITY_MANAGER_KEYS = frozenset({"client", "cache_dir"})
TOP_LEVEL_KEYS = frozenset({"connections", "clients", "entity_managers", "profiling"})

TRUTHY = frozenset({"true", "yes", "on", "1"})
FALSY = frozenset({"false", "no", "off", "0", ""})


class ConfigPathNotSetError(ConfigurationError):
    """Raised when no config path is given and NEOBUNDLE_CONFIG is not set."""

    def __init__(self) -> None:
        super().__init__(f"{CONFIG_PATH_ENVVAR} is not set")


@dataclass(frozen=True)
class ConnectionConfig:
    """Raw connection entry with its defaults applied."""

    scheme: Scheme = Scheme.BOLT
    host: str = "localhost"
    port: int | None = None
    username: str = "neo4j"
    password: str = "neo4j"


@dataclass(frozen=True)
class ClientConfig:
    """Raw client entry."""

    connections: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityManagerConfig:
    """Raw entity-manager entry."""

    client: str = "default"
    cache_dir: str | None = None


@dataclass(frozen=True)
class BundleConfig:
    """The whole configuration tree, in declaration order."""

    connections: Mapping[str, ConnectionConfig] = field(default_factory=dict)
    clients: Mapping[str, ClientConfig] = field(default_factory=dict)
    entity_managers: Mapping[str, EntityManagerConfig] = field(default_factory=dict)
    profiling: bool = False


# ============================================================================
#                           Environment
# ============================================================================


def get_config_path() -> Path:
    """Get the configuration file path from the environment.

    Returns:
        The value of the `NEOBUNDLE_CONFIG` environment variable as a path.

    Raises:
        ConfigPathNotSetError: If `NEOBUNDLE_CONFIG` is not set.
    """
    if not (path := os.environ.get(CONFIG_PATH_ENVVAR)):
        raise ConfigPathNotSetError
    return Path(path)


def default_cache_root() -> Path:
    """Return the global cache root entity-manager cache dirs default under.

    `NEOBUNDLE_CACHE_DIR` wins when set; otherwise the platform's user cache
    directory for ``neobundle``.
    """
    if override := os.environ.get(CACHE_DIR_ENVVAR):
        return Path(override)
    return Path(user_cache_dir("neobundle", appauthor=False))


# ============================================================================
#                           Parsing
# ============================================================================


def _require_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError(path, "expected a mapping")
    return value


def _reject_unknown_keys(
    entry: Mapping[str, Any], allowed: frozenset[str], path: str
) -> None:
    if unknown := sorted(str(key) for key in set(entry) - allowed):
        raise InvalidConfigurationError(
            f"{path}.{unknown[0]}",
            f"unrecognized option (expected one of: {', '.join(sorted(allowed))})",
        )


def _require_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise InvalidConfigurationError(path, "expected a string")
    return value


def _parse_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY:
            return True
        if lowered in FALSY:
            return False
    raise InvalidConfigurationError(path, f"expected a boolean, got {value!r}")


def _parse_port(value: Any, path: str) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; `port: true` is a typo, not port 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(path, "expected an integer")
    if not 1 <= value <= 65535:
        raise InvalidConfigurationError(path, f"port {value} is out of range")
    return value


def parse_connection(raw: Any, path: str) -> ConnectionConfig:
    """Parse one connection entry, applying defaults for omitted options."""
    entry = _require_mapping(raw, path)
    _reject_unknown_keys(entry, CONNECTION_KEYS, path)
    defaults = ConnectionConfig()

    scheme_value = _require_str(
        entry.get("scheme", defaults.scheme.value), f"{path}.scheme"
    )
    try:
        scheme = Scheme(scheme_value.lower())
    except ValueError as e:
        allowed = ", ".join(s.value for s in Scheme)
        raise InvalidConfigurationError(
            f"{path}.scheme",
            f"unsupported scheme {scheme_value!r} (expected one of: {allowed})",
        ) from e

    return ConnectionConfig(
        scheme=scheme,
        host=_require_str(entry.get("host", defaults.host), f"{path}.host"),
        port=_parse_port(entry.get("port"), f"{path}.port"),
        username=_require_str(
            entry.get("username", defaults.username), f"{path}.username"
        ),
        password=_require_str(
            entry.get("password", defaults.password), f"{path}.password"
        ),
    )


def parse_client(raw: Any, path: str) -> ClientConfig:
    """Parse one client entry."""
    entry = _require_mapping(raw, path)
    _reject_unknown_keys(entry, CLIENT_KEYS, path)
    names = entry.get("connections") or []
    if isinstance(names, str) or not isinstance(names, list):
        raise InvalidConfigurationError(f"{path}.connections", "expected a list")
    return ClientConfig(
        connections=tuple(
            _require_str(name, f"{path}.connections[{i}]")
            for i, name in enumerate(names)
        )
    )


def parse_entity_manager(raw: Any, path: str) -> EntityManagerConfig:
    """Parse one entity-manager entry."""
    entry = _require_mapping(raw, path)
    _reject_unknown_keys(entry, ENTITY_MANAGER_KEYS, path)
    defaults = EntityManagerConfig()
    cache_dir = entry.get("cache_dir")
    return EntityManagerConfig(
        client=_require_str(entry.get("client", defaults.client), f"{path}.client"),
        cache_dir=(
            None
            if cache_dir is None
            else _require_str(cache_dir, f"{path}.cache_dir")
        ),
    )


def parse_config(raw: Any) -> BundleConfig:
    """Parse a raw configuration tree into a `BundleConfig`.

    The tree may be nested under a top-level ``neo4j`` key. Entry order of each
    section is preserved; it decides which connection becomes ``default`` and
    master when none is named ``default``.

    Args:
        raw: The configuration tree, e.g. the result of `yaml.safe_load`.

    Returns:
        The parsed configuration.

    Raises:
        InvalidConfigurationError: If the tree is structurally invalid.
    """
    tree = _require_mapping(raw, "<root>")
    if set(tree) == {ROOT_KEY}:
        tree = _require_mapping(tree[ROOT_KEY], ROOT_KEY)
    _reject_unknown_keys(tree, TOP_LEVEL_KEYS, "<root>")

    def section(key, parse_entry):
        entries = _require_mapping(tree.get(key), key)
        for name in entries:
            if not isinstance(name, str):
                raise InvalidConfigurationError(
                    f"{key}.{name}", f"entry names must be strings, got {name!r}"
                )
        return {
            name: parse_entry(entry, f"{key}.{name}")
            for name, entry in entries.items()
        }

    return BundleConfig(
        connections=section("connections", parse_connection),
        clients=section("clients", parse_client),
        entity_managers=section("entity_managers", parse_entity_manager),
        profiling=_parse_bool(tree.get("profiling", False), "profiling"),
    )


def load_config(path: Path | str) -> BundleConfig:
    """Read and parse a YAML configuration file.

    Args:
        path: Path of the YAML document.

    Returns:
        The parsed configuration.

    Raises:
        InvalidConfigurationError: If the file is not UTF-8, not valid YAML or
            structurally invalid.
        OSError: If the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidConfigurationError(
            str(path), f"not valid UTF-8 (byte {e.start})"
        ) from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(str(path), f"not valid YAML ({e})") from e
    return parse_config(raw)

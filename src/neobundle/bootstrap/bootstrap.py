"""Bootstrap the resolved registries and their service map."""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path

from neobundle import config
from neobundle.adapters.service_map import ServiceMap, build_service_map
from neobundle.domain.model import ResolvedBundle
from neobundle.service_layer.pipeline import resolve_bundle

logger = logging.getLogger(__name__)

OGM_PACKAGE = "neomodel"


@dataclass(frozen=True)
class AppContainer:
    """A class to hold the outcome of one bootstrap."""

    bundle: ResolvedBundle
    service_map: ServiceMap


def ogm_installed(package: str = OGM_PACKAGE) -> bool:
    """Return True if the OGM distribution is importable."""
    return importlib.util.find_spec(package) is not None


def bootstrap(
    config_path: Path | str | None = None,
    *,
    cache_root: Path | str | None = None,
    ogm: bool | None = None,
) -> AppContainer:
    """Load the configuration and resolve it into registries.

    Args:
        config_path: YAML configuration file. Defaults to `NEOBUNDLE_CONFIG`.
        cache_root: Global cache root. Defaults to `config.default_cache_root()`.
        ogm: Override of the OGM capability probe. When None, `ogm_installed()`
            is consulted once.

    Returns:
        The resolved bundle and its service map.

    Raises:
        ConfigurationError: If the configuration cannot be loaded or resolved.
    """
    path = Path(config_path) if config_path is not None else config.get_config_path()
    logger.debug("Loading configuration from %s", path)
    bundle_config = config.load_config(path)

    capability = ogm_installed() if ogm is None else ogm
    root = cache_root if cache_root is not None else config.default_cache_root()

    bundle = resolve_bundle(bundle_config, ogm_installed=capability, cache_root=root)
    return AppContainer(bundle=bundle, service_map=build_service_map(bundle))

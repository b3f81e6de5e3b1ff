"""Bootstrap (composition root) for NEOBUNDLE.

Assembles a resolution pass at runtime: reads configuration, probes the
environment for the optional OGM capability, runs the resolver pipeline, and
flattens the result into a service map for the host application's container.

Import rules:
- Entry points import *this* package (not adapters/service_layer/domain).
- This package may import: `neobundle.adapters`, `neobundle.service_layer`,
  `neobundle.domain`, and `neobundle.config`.
- Inner layers must not import `neobundle.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No resolution rules live here; this is assembly only.
"""

from .bootstrap import AppContainer, bootstrap, ogm_installed

__all__ = ["AppContainer", "bootstrap", "ogm_installed"]

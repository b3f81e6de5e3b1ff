"""Entrypoints (inbound adapters) for NEOBUNDLE.

Expose the resolver to the outside world through the command line. Parse and
validate inputs, call the bootstrap, and present results.

Dependency rule: may import `neobundle.bootstrap` and `neobundle.service_layer`;
avoid importing `neobundle.adapters` directly.
"""

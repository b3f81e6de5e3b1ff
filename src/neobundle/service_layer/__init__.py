"""Service layer for NEOBUNDLE.

Implements the resolution pass: each stage turns raw configuration entries into
a domain registry, validating references against the registries built by the
stages before it.

Dependency rule: may import `neobundle.domain`, but not `neobundle.adapters` or
`neobundle.entrypoints`.
"""

"""Domain layer for NEOBUNDLE.

Contains the value objects describing resolved connections, clients and entity
managers, the registries that hold them, and the error hierarchy raised while
resolving a configuration. The only third-party import is SQLAlchemy's `URL`,
used to compose and mask connection URLs.

Dependency rule: do not import from `neobundle.adapters` or `neobundle.entrypoints`.
"""

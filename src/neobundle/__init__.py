"""NEOBUNDLE

Resolves a declarative Neo4j endpoint configuration (connections, clients and
optional OGM entity managers) into validated, name-addressable registries that
an application bootstrap hands to its service container.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

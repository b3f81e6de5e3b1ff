"""Adapters for NEOBUNDLE.

Translate resolved registries into the shapes expected by external
collaborators (e.g., the flat service map consumed by a DI container).

Dependency rule: may import `neobundle.domain`; the domain must not import this
package.
"""

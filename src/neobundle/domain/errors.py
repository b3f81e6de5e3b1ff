"""Domain-layer error definitions."""

# ============================================================================
#                           General errors
# ============================================================================


class NeobundleError(Exception):
    """Base class for all NEOBUNDLE errors."""


class ConfigurationError(NeobundleError):
    """Base class for errors that make a configuration unusable.

    Configuration errors are deterministic: they abort the resolution pass and
    must be fixed by the operator.
    """


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration entry is structurally invalid."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid configuration at '{path}': {reason}")
        self.path = path
        self.reason = reason


# ============================================================================
#                           Reference errors
# ============================================================================


class UnknownConnectionReferenceError(ConfigurationError):
    """Raised when a client names a connection that was never declared."""

    def __init__(self, client: str, connection: str) -> None:
        super().__init__(
            f'Client "{client}" is configured to use connection named '
            f'"{connection}" but there is no such connection'
        )
        self.client = client
        self.connection = connection


class UnknownClientReferenceError(ConfigurationError):
    """Raised when an entity manager names a client that was never declared."""

    def __init__(self, entity_manager: str, client: str) -> None:
        super().__init__(
            f'EntityManager "{entity_manager}" is configured to use client named '
            f'"{client}" but there is no such client'
        )
        self.entity_manager = entity_manager
        self.client = client


# ============================================================================
#                           Capability errors
# ============================================================================


class MissingCapabilityError(ConfigurationError):
    """Raised when entity managers are configured but no OGM is installed."""

    def __init__(self, package: str = "neomodel") -> None:
        super().__init__(
            f'You need to install "{package}" to be able to use the EntityManager'
        )
        self.package = package

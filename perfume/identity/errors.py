"""Errors raised while deriving identities."""


class StorageFailure(Exception):
    """Raised when a connection bridge fails to fetch or store a blob.

    Nothing is retained locally when this is raised, so the whole offset
    lookup may be retried from the start.
    """


class PopulationExhausted(Exception):
    """Raised when an offset exceeds what the population can render or store."""


class ConfigurationError(Exception):
    """Raised when population data is incomplete or inconsistent."""

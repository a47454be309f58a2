"""Error types for the daily digest job."""


class DigestError(Exception):
    """Fatal error that aborts a digest run."""


class ConfigurationError(DigestError, ValueError):
    """A required setting is missing or invalid."""


class EventsFetchError(DigestError):
    """The mandatory events query failed."""

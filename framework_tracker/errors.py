"""Exception types raised by the collection pipeline."""


class ConfigError(ValueError):
    """Required configuration is missing or invalid."""


class FetchError(Exception):
    """A remote call for one framework failed."""

    kind = "permanent"

    def __init__(self, source: str, target: str, message: str):
        self.source = source
        self.target = target
        super().__init__(f"{source} request for {target} failed: {message}")


class TransientFetchError(FetchError):
    """Timeouts, connection failures, rate limiting and server errors."""

    kind = "transient"


class PermanentFetchError(FetchError):
    """Client errors and responses that cannot be decoded."""

    kind = "permanent"


class StorageError(Exception):
    """The relational store rejected a read or write."""

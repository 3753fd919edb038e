"""Exception hierarchy for SSL operations."""


class SSLOperationsError(Exception):
    """Base class for all SSL operations errors."""


class ConfigError(SSLOperationsError):
    """Raised when required configuration is missing or invalid."""


class TransportError(SSLOperationsError):
    """Raised on connection-level failures talking to the Namecheap API."""


class ResponseParseError(SSLOperationsError):
    """Raised when an API response is malformed or missing required fields."""

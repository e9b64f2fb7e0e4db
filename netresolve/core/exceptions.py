"""Custom exceptions for network host resolution."""


class NetResolveError(Exception):
    """Base exception for all host resolution errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NameResolutionError(NetResolveError):
    """Raised when the platform resolver cannot resolve a literal host."""

    def __init__(self, host: str, reason: str | None = None):
        message = f"Failed to resolve host [{host}]"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"host": host, "reason": reason})
        self.host = host
        self.reason = reason


class InterfaceNotFoundError(NetResolveError):
    """Raised when a token matches no up, non-loopback network interface."""

    def __init__(self, token: str):
        message = f"Failed to find network interface for [{token}]"
        super().__init__(message, {"token": token})
        self.token = token


class CustomResolverError(NetResolveError):
    """Raised by the custom name resolvers shipped with this package."""

    def __init__(
        self,
        resolver: str,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        full_message = f"[{resolver}] {message}"
        super().__init__(
            full_message,
            {
                "resolver": resolver,
                "endpoint": endpoint,
                "status_code": status_code,
            },
        )
        self.resolver = resolver
        self.endpoint = endpoint
        self.status_code = status_code


class ConfigurationError(NetResolveError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key

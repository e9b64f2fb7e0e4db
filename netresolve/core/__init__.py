"""Core module - settings, data models, types, and exceptions."""

from .config import Settings, get_settings, reload_settings
from .models import NetworkInterface
from .types import (
    CustomNameResolver,
    InetAddress,
    IpStack,
    SettingKeys,
    TcpSettingKeys,
)
from .exceptions import (
    NetResolveError,
    NameResolutionError,
    InterfaceNotFoundError,
    CustomResolverError,
    ConfigurationError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "reload_settings",
    # Models
    "NetworkInterface",
    # Types
    "CustomNameResolver",
    "InetAddress",
    "IpStack",
    "SettingKeys",
    "TcpSettingKeys",
    # Exceptions
    "NetResolveError",
    "NameResolutionError",
    "InterfaceNotFoundError",
    "CustomResolverError",
    "ConfigurationError",
]

"""Network utilities - interface enumeration and local address detection."""

from .network import NetworkUtils, log_network_info

__all__ = ["NetworkUtils", "log_network_info"]

"""Type definitions and enums for host resolution."""

import socket
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Callable, Union

from .exceptions import ConfigurationError


class IpStack(str, Enum):
    """Preferred IP protocol stack."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"
    ANY = "any"

    @property
    def address_family(self) -> int:
        """Socket address family used to filter platform lookups."""
        families = {
            IpStack.IPV4: socket.AF_INET,
            IpStack.IPV6: socket.AF_INET6,
            IpStack.ANY: socket.AF_UNSPEC,
        }
        return families[self]

    def accepts(self, address: "InetAddress") -> bool:
        """Check whether an address belongs to this stack."""
        if self is IpStack.ANY:
            return True
        return address.version == (4 if self is IpStack.IPV4 else 6)

    @classmethod
    def from_setting(cls, value: str | None) -> "IpStack | None":
        """Parse a ``network.ip_stack`` value (``None`` when unset)."""
        if value is None or not value.strip():
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                SettingKeys.IP_STACK,
                f"invalid value '{value}', expected one of: ipv4, ipv6, any",
            )


class SettingKeys:
    """Settings keys consumed by the resolver."""

    HOST = "network.host"
    BIND_HOST = "network.bind_host"
    PUBLISH_HOST = "network.publish_host"
    IP_STACK = "network.ip_stack"


class TcpSettingKeys:
    """TCP socket option keys."""

    TCP_NO_DELAY = "network.tcp.no_delay"
    TCP_KEEP_ALIVE = "network.tcp.keep_alive"
    TCP_REUSE_ADDRESS = "network.tcp.reuse_address"
    TCP_SEND_BUFFER_SIZE = "network.tcp.send_buffer_size"
    TCP_RECEIVE_BUFFER_SIZE = "network.tcp.receive_buffer_size"


# Type aliases for common patterns
InetAddress = Union[IPv4Address, IPv6Address]
CustomNameResolver = Callable[[], InetAddress]

# Sentinel wrapping symbolic host tokens, e.g. "#local#"
TOKEN_DELIMITER = "#"
LOCAL_TOKEN = "local"
LOCAL = f"{TOKEN_DELIMITER}{LOCAL_TOKEN}{TOKEN_DELIMITER}"

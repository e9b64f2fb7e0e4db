"""Pydantic data models for host resolution.

Models are immutable (frozen) after creation so interface snapshots can be
shared between resolutions without copying.
"""

from ipaddress import IPv4Address, IPv6Address, ip_address

from pydantic import BaseModel, Field, field_validator

from .types import InetAddress, IpStack


class NetworkInterface(BaseModel):
    """A network interface as enumerated from the operating system."""

    name: str
    display_name: str
    index: int | None = None
    is_up: bool = False
    is_loopback: bool = False
    mtu: int | None = None
    supports_multicast: bool = False
    addresses: tuple[IPv4Address | IPv6Address, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @field_validator("addresses", mode="before")
    @classmethod
    def parse_addresses(cls, value):
        """Parse address strings, keeping IPv6 zones (``fe80::1%eth0``)."""
        if value is None:
            return ()
        return tuple(ip_address(a) if isinstance(a, str) else a for a in value)

    def matches(self, token: str) -> bool:
        """Check if the token names this interface."""
        return token == self.name or token == self.display_name

    def addresses_for(self, ip_stack: IpStack) -> list[InetAddress]:
        """Addresses of this interface belonging to the given stack."""
        return [a for a in self.addresses if ip_stack.accepts(a)]

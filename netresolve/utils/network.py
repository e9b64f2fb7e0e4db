"""Network interface utilities.

Enumerates interfaces through psutil and picks local addresses for the
resolver.
"""

import logging
import socket
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Optional

import psutil

from ..core.models import NetworkInterface
from ..core.types import InetAddress, IpStack

logger = logging.getLogger(__name__)

_ADDRESS_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def _parse_address(raw: str) -> Optional[InetAddress]:
    try:
        return ip_address(raw)
    except ValueError:
        return None


class NetworkUtils:
    """Interface enumeration and local address selection."""

    def __init__(self, ip_stack: Optional[IpStack] = None):
        """
        Initialize network utilities.

        Args:
            ip_stack: Preferred IP stack; detected from the platform if None
        """
        self.ip_stack = ip_stack

    def get_ip_stack_type(self) -> IpStack:
        """Preferred IP stack for address selection."""
        if self.ip_stack is not None:
            return self.ip_stack
        return IpStack.ANY if socket.has_ipv6 else IpStack.IPV4

    def get_all_available_interfaces(self) -> list[NetworkInterface]:
        """Enumerate network interfaces with their addresses and state."""
        all_addrs = psutil.net_if_addrs()
        all_stats = psutil.net_if_stats()
        indexes = self._interface_indexes()

        interfaces = []
        for name, snics in all_addrs.items():
            addresses = []
            for snic in snics:
                if snic.family not in _ADDRESS_FAMILIES:
                    continue
                address = _parse_address(snic.address)
                if address is not None:
                    addresses.append(address)

            stats = all_stats.get(name)
            flags = set(getattr(stats, "flags", "").split(",")) if stats else set()
            is_loopback = "loopback" in flags or (
                bool(addresses) and all(a.is_loopback for a in addresses)
            )

            interfaces.append(
                NetworkInterface(
                    name=name,
                    display_name=name,
                    index=indexes.get(name),
                    is_up=bool(stats and stats.isup),
                    is_loopback=is_loopback,
                    mtu=stats.mtu if stats else None,
                    supports_multicast="multicast" in flags,
                    addresses=tuple(addresses),
                )
            )

        # Unindexed interfaces go last, keeping psutil order
        interfaces.sort(key=lambda i: (i.index is None, i.index or 0))
        return interfaces

    def _interface_indexes(self) -> dict[str, int]:
        if not hasattr(socket, "if_nameindex"):
            return {}
        try:
            return {name: index for index, name in socket.if_nameindex()}
        except OSError as e:
            logger.debug(f"Could not read interface indexes: {e}")
            return {}

    def get_first_non_loopback_address(
        self,
        interface: NetworkInterface,
        ip_stack: IpStack,
    ) -> Optional[InetAddress]:
        """First non-loopback address of the interface matching the stack."""
        for address in interface.addresses_for(ip_stack):
            if not address.is_loopback:
                return address
        return None

    def get_local_address(self) -> InetAddress:
        """
        Best guess at this host's own address.

        Tries the platform host name first, then the first non-loopback
        address of any up interface, then the loopback address.
        """
        ip_stack = self.get_ip_stack_type()
        try:
            host_name = socket.gethostname()
            for *_, sockaddr in socket.getaddrinfo(host_name, None, ip_stack.address_family):
                address = _parse_address(sockaddr[0])
                if address is not None and not address.is_loopback:
                    return address
        except OSError as e:
            logger.debug(f"Failed to resolve local host name: {e}")

        for interface in self.get_all_available_interfaces():
            if not interface.is_up or interface.is_loopback:
                continue
            address = self.get_first_non_loopback_address(interface, ip_stack)
            if address is not None:
                return address

        if ip_stack is IpStack.IPV6:
            return IPv6Address("::1")
        return IPv4Address("127.0.0.1")

    def describe_interfaces(self) -> str:
        """Multi-line description of the host and its interfaces."""
        lines = ["net_info", f"host [{socket.gethostname()}]"]
        for interface in self.get_all_available_interfaces():
            lines.append(f"{interface.name}\tdisplay_name [{interface.display_name}]")
            addresses = " ".join(f"[{a}]" for a in interface.addresses)
            lines.append(f"\t\taddress {addresses}")
            lines.append(
                f"\t\tmtu [{interface.mtu}] multicast [{interface.supports_multicast}] "
                f"loopback [{interface.is_loopback}] up [{interface.is_up}]"
            )
        return "\n".join(lines)


def log_network_info(network_utils: NetworkUtils) -> None:
    """Log interface details at debug level."""
    try:
        logger.debug(network_utils.describe_interfaces())
    except Exception as e:
        logger.debug(f"Failed to get network interface info [{e}]")

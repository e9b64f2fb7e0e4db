"""Network service - resolves bind and publish host settings to addresses.

A host value is one of:
- a literal name or address (``10.0.0.5``, ``node1.internal``)
- ``#local#`` for the detected local address
- ``#<interface>#`` naming a network interface (``#eth0#``)
- ``#<name>#`` for a registered custom resolver (``#ec2:privateIpv4#``)

Empty values fall through to the next configured default.
"""

import logging
import socket
from ipaddress import ip_address
from typing import Optional

from ..core.config import Settings, get_settings
from ..core.exceptions import InterfaceNotFoundError, NameResolutionError
from ..core.types import (
    LOCAL_TOKEN,
    CustomNameResolver,
    InetAddress,
    IpStack,
    SettingKeys,
)
from ..utils.network import NetworkUtils, log_network_info
from .registry import ResolverRegistry, canonical_token, is_token, strip_token

logger = logging.getLogger(__name__)


def _first_present(*values: Optional[str]) -> Optional[str]:
    """Return the first value that is neither None nor blank."""
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None


def _is_wildcard(address: InetAddress) -> bool:
    """Check for 0.0.0.0, :: and the IPv4-mapped ::ffff:0.0.0.0."""
    if address.is_unspecified:
        return True
    mapped = getattr(address, "ipv4_mapped", None)
    return mapped is not None and mapped.is_unspecified


class NetworkService:
    """Resolves symbolic host settings for the bind and publish roles."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        network_utils: Optional[NetworkUtils] = None,
    ):
        """
        Initialize the network service.

        Args:
            settings: Settings store (defaults to the global settings)
            network_utils: Interface and local address helper
        """
        self.settings = settings if settings is not None else get_settings()
        if network_utils is None:
            ip_stack = IpStack.from_setting(self.settings.get(SettingKeys.IP_STACK))
            network_utils = NetworkUtils(ip_stack=ip_stack)
        self.network_utils = network_utils
        self.registry = ResolverRegistry()

        if logger.isEnabledFor(logging.DEBUG):
            log_network_info(self.network_utils)

    def add_custom_name_resolver(self, name: str, resolver: CustomNameResolver) -> str:
        """
        Register a resolver for ``#name#`` host values.

        A later registration under the same name replaces the earlier one.

        Returns:
            The canonical token name
        """
        return self.registry.register(name, resolver)

    def resolve_bind_host_address(
        self,
        bind_host: Optional[str] = None,
        default_value2: Optional[str] = None,
    ) -> Optional[InetAddress]:
        """
        Resolve the address to bind listening sockets to.

        Falls back to ``network.bind_host``, then ``network.host``, then
        ``default_value2``. Returns None when nothing is configured.
        """
        return self.resolve_inet_address(
            bind_host,
            self.settings.get(SettingKeys.BIND_HOST, SettingKeys.HOST),
            default_value2,
        )

    def resolve_publish_host_address(
        self,
        publish_host: Optional[str] = None,
        default_value2: Optional[str] = None,
    ) -> InetAddress:
        """
        Resolve the address advertised to peers.

        Falls back to ``network.publish_host``, then ``network.host``, then
        ``default_value2``. A missing or wildcard result (``0.0.0.0``, ``::``,
        ``::ffff:0.0.0.0``) is replaced with the local address.
        """
        address = self.resolve_inet_address(
            publish_host,
            self.settings.get(SettingKeys.PUBLISH_HOST, SettingKeys.HOST),
            default_value2,
        )
        if address is None or _is_wildcard(address):
            local = self.network_utils.get_local_address()
            logger.debug(f"Publish address [{address}] is not routable, using local address [{local}]")
            address = local
        return address

    def resolve_inet_address(
        self,
        host: Optional[str],
        default_value1: Optional[str] = None,
        default_value2: Optional[str] = None,
    ) -> Optional[InetAddress]:
        """
        Resolve a host value to an address.

        Args:
            host: Requested host value
            default_value1: Used when ``host`` is not set
            default_value2: Used when neither of the above is set

        Returns:
            The resolved address, or None if no value was given

        Raises:
            NameResolutionError: If a literal host cannot be resolved
            InterfaceNotFoundError: If a token matches no usable interface
        """
        value = _first_present(host, default_value1, default_value2)
        if value is None:
            return None

        if not is_token(value):
            return self._resolve_literal(value)

        token = strip_token(value)
        resolvers = self.registry.snapshot()
        custom_resolver = resolvers.get(canonical_token(token))
        if custom_resolver is not None:
            logger.debug(f"Resolving [{value}] with custom name resolver")
            return custom_resolver()

        if token == LOCAL_TOKEN:
            return self.network_utils.get_local_address()

        return self._resolve_interface(token)

    def _resolve_interface(self, token: str) -> Optional[InetAddress]:
        """Return the address of the first up, non-loopback interface named ``token``.

        An interface that matches but has no address for the preferred stack
        resolves to None.
        """
        for interface in self.network_utils.get_all_available_interfaces():
            if not interface.is_up or interface.is_loopback:
                continue
            if interface.matches(token):
                logger.debug(f"Resolving [#{token}#] via interface {interface.name}")
                return self.network_utils.get_first_non_loopback_address(
                    interface, self.network_utils.get_ip_stack_type()
                )
        raise InterfaceNotFoundError(token)

    def _resolve_literal(self, host: str) -> InetAddress:
        """Resolve a literal address or host name through the platform resolver."""
        try:
            return ip_address(host)
        except ValueError:
            pass

        try:
            results = socket.getaddrinfo(host, None)
        except (OSError, UnicodeError) as e:
            raise NameResolutionError(host, str(e)) from e
        if not results:
            raise NameResolutionError(host, "no addresses returned")

        addresses = [ip_address(sockaddr[0]) for *_, sockaddr in results]
        ip_stack = self.network_utils.get_ip_stack_type()
        for address in addresses:
            if ip_stack.accepts(address):
                return address
        return addresses[0]

"""EC2 custom name resolvers backed by the instance metadata service.

Registers tokens such as ``#ec2:privateIpv4#`` so a node running on EC2 can
bind to or publish its own addresses without knowing them in advance.
"""

import logging
import socket
from ipaddress import ip_address
from typing import TYPE_CHECKING

import httpx

from ..core.exceptions import CustomResolverError
from ..core.types import InetAddress

if TYPE_CHECKING:
    from .network_service import NetworkService

logger = logging.getLogger(__name__)

EC2_METADATA_URL = "http://169.254.169.254/latest"
TOKEN_TTL_SECONDS = 21600

# token name -> metadata path
EC2_METADATA_PATHS: dict[str, str] = {
    "ec2": "local-ipv4",
    "ec2:privateIpv4": "local-ipv4",
    "ec2:publicIpv4": "public-ipv4",
    "ec2:privateDns": "local-hostname",
    "ec2:publicDns": "public-hostname",
}


class Ec2NameResolver:
    """Resolves one EC2 metadata entry to an address."""

    RESOLVER_NAME = "ec2"

    def __init__(
        self,
        metadata_path: str,
        base_url: str = EC2_METADATA_URL,
        timeout: float = 2.0,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            metadata_path: Path under ``meta-data/`` (e.g. ``local-ipv4``)
            base_url: Metadata service base URL
            timeout: Request timeout in seconds
            client: Optional shared HTTP client (tests inject a mock transport)
        """
        self.metadata_path = metadata_path
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client

    def __call__(self) -> InetAddress:
        """Fetch the metadata value and turn it into an address."""
        if self.client is not None:
            value = self._fetch(self.client)
        else:
            with httpx.Client(timeout=self.timeout) as client:
                value = self._fetch(client)

        try:
            return ip_address(value)
        except ValueError:
            pass

        # Hostname entries (local-hostname, public-hostname)
        try:
            results = socket.getaddrinfo(value, None)
        except (OSError, UnicodeError) as e:
            raise CustomResolverError(
                self.RESOLVER_NAME,
                f"could not resolve '{value}' from {self.metadata_path}: {e}",
                endpoint=self.metadata_path,
            ) from e
        if not results:
            raise CustomResolverError(
                self.RESOLVER_NAME,
                f"no addresses for '{value}' from {self.metadata_path}",
                endpoint=self.metadata_path,
            )
        return ip_address(results[0][4][0])

    def _fetch_session_token(self, client: httpx.Client) -> str | None:
        """Request an IMDSv2 session token, or None to fall back to IMDSv1."""
        try:
            response = client.put(
                f"{self.base_url}/api/token",
                headers={"X-aws-ec2-metadata-token-ttl-seconds": str(TOKEN_TTL_SECONDS)},
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            logger.debug(f"IMDSv2 token request failed ({e}), using IMDSv1")
            return None

        if response.status_code != 200:
            logger.debug(f"IMDSv2 token request returned HTTP {response.status_code}, using IMDSv1")
            return None
        return response.text.strip()

    def _fetch(self, client: httpx.Client) -> str:
        headers = {}
        token = self._fetch_session_token(client)
        if token:
            headers["X-aws-ec2-metadata-token"] = token

        url = f"{self.base_url}/meta-data/{self.metadata_path}"
        try:
            response = client.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CustomResolverError(
                self.RESOLVER_NAME,
                f"HTTP {e.response.status_code}",
                endpoint=self.metadata_path,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise CustomResolverError(
                self.RESOLVER_NAME, str(e), endpoint=self.metadata_path
            ) from e

        value = response.text.strip()
        if not value:
            raise CustomResolverError(
                self.RESOLVER_NAME,
                "empty metadata response",
                endpoint=self.metadata_path,
            )
        logger.debug(f"EC2 metadata {self.metadata_path} = {value}")
        return value


def register_ec2_resolvers(
    service: "NetworkService",
    base_url: str = EC2_METADATA_URL,
    timeout: float = 2.0,
    client: httpx.Client | None = None,
) -> list[str]:
    """
    Register all EC2 tokens on a network service.

    Returns:
        Canonical token names that were registered
    """
    registered = []
    for name, path in EC2_METADATA_PATHS.items():
        resolver = Ec2NameResolver(path, base_url=base_url, timeout=timeout, client=client)
        registered.append(service.add_custom_name_resolver(name, resolver))
    return registered

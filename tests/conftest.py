"""Pytest configuration and fixtures for netresolve tests."""

from ipaddress import IPv4Address, ip_address
from pathlib import Path

import pytest

from netresolve.core.config import Settings
from netresolve.core.models import NetworkInterface
from netresolve.core.types import IpStack
from netresolve.resolution.network_service import NetworkService
from netresolve.utils.network import NetworkUtils

LOCAL_ADDRESS = IPv4Address("192.168.1.20")


class FakeNetworkUtils(NetworkUtils):
    """Network utilities over a fixed interface list."""

    def __init__(self, interfaces, local_address=LOCAL_ADDRESS, ip_stack=IpStack.ANY):
        super().__init__(ip_stack=ip_stack)
        self.interfaces = list(interfaces)
        self.local_address = local_address
        self.local_address_calls = 0

    def get_all_available_interfaces(self):
        return list(self.interfaces)

    def get_local_address(self):
        self.local_address_calls += 1
        return self.local_address


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_interfaces() -> list[NetworkInterface]:
    """Loopback, one up interface, one down interface and a named adapter."""
    return [
        NetworkInterface(
            name="lo",
            display_name="lo",
            index=1,
            is_up=True,
            is_loopback=True,
            addresses=(ip_address("127.0.0.1"), ip_address("::1")),
        ),
        NetworkInterface(
            name="eth0",
            display_name="eth0",
            index=2,
            is_up=True,
            mtu=1500,
            supports_multicast=True,
            addresses=(ip_address("fe80::1"), ip_address("10.0.0.5")),
        ),
        NetworkInterface(
            name="eth1",
            display_name="eth1",
            index=3,
            is_up=False,
            addresses=(ip_address("10.0.1.5"),),
        ),
        NetworkInterface(
            name="wlan0",
            display_name="Wireless Adapter",
            index=4,
            is_up=True,
            addresses=(ip_address("172.16.0.9"),),
        ),
    ]


@pytest.fixture
def fake_network_utils(sample_interfaces) -> FakeNetworkUtils:
    """Fake network utilities preferring IPv4 addresses."""
    return FakeNetworkUtils(sample_interfaces, ip_stack=IpStack.IPV4)


@pytest.fixture
def settings() -> Settings:
    """Empty settings."""
    return Settings()


@pytest.fixture
def service(settings, fake_network_utils) -> NetworkService:
    """Network service over fake interfaces with no configured hosts."""
    return NetworkService(settings=settings, network_utils=fake_network_utils)

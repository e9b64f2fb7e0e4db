"""Host resolution module - resolves host settings to network addresses."""

from .ec2 import Ec2NameResolver, register_ec2_resolvers
from .network_service import NetworkService
from .registry import ResolverRegistry, canonical_token, is_token, strip_token

__all__ = [
    "NetworkService",
    "ResolverRegistry",
    "Ec2NameResolver",
    "register_ec2_resolvers",
    "canonical_token",
    "is_token",
    "strip_token",
]

"""Registry of custom name resolvers keyed by ``#token#`` name.

The registry holds an immutable snapshot that is replaced wholesale on every
registration. Readers grab the current snapshot with a single attribute load
and never take a lock; a resolution that already holds a snapshot keeps
seeing it even if a registration lands mid-flight.
"""

import logging
from types import MappingProxyType
from typing import Mapping

from ..core.types import TOKEN_DELIMITER, CustomNameResolver

logger = logging.getLogger(__name__)


def is_token(value: str) -> bool:
    """Check if a host value is a delimited token such as ``#local#``."""
    return (
        len(value) > 2
        and value.startswith(TOKEN_DELIMITER)
        and value.endswith(TOKEN_DELIMITER)
    )


def strip_token(value: str) -> str:
    """Remove the token delimiters, leaving non-tokens untouched."""
    if is_token(value):
        return value[1:-1]
    return value


def canonical_token(name: str) -> str:
    """Wrap a resolver name in delimiters unless it already is a token."""
    if is_token(name):
        return name
    return f"{TOKEN_DELIMITER}{name}{TOKEN_DELIMITER}"


class ResolverRegistry:
    """Copy-on-write mapping of canonical token names to custom resolvers."""

    def __init__(self) -> None:
        self._resolvers: Mapping[str, CustomNameResolver] = MappingProxyType({})

    def register(self, name: str, resolver: CustomNameResolver) -> str:
        """
        Register a custom resolver.

        Args:
            name: Token name, bare (``ec2``) or delimited (``#ec2#``)
            resolver: Zero-argument callable returning an address

        Returns:
            The canonical token name the resolver was stored under
        """
        if not name or not name.strip(TOKEN_DELIMITER).strip():
            raise ValueError("Resolver name must not be empty")
        if not callable(resolver):
            raise TypeError(f"Resolver for '{name}' is not callable")

        key = canonical_token(name)
        updated = dict(self._resolvers)
        updated[key] = resolver
        self._resolvers = MappingProxyType(updated)

        logger.debug(f"Registered custom name resolver {key}")
        return key

    def snapshot(self) -> Mapping[str, CustomNameResolver]:
        """Return the current immutable resolver mapping."""
        return self._resolvers

    def lookup(self, name: str) -> CustomNameResolver | None:
        """Find the resolver for a bare or delimited token name."""
        return self._resolvers.get(canonical_token(name))

    def names(self) -> list[str]:
        """Canonical names of all registered resolvers."""
        return sorted(self._resolvers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._resolvers)

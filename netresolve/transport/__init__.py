"""Transport module - socket options for bound and published addresses."""

from .tcp import TcpSettings

__all__ = ["TcpSettings"]

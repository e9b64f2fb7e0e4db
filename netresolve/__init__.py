"""Network host resolution for service startup.

Resolves symbolic host settings (literal names, ``#local#``, interface
names such as ``#eth0#`` and registered custom tokens) into the concrete
addresses a service binds to and publishes to its peers.
"""

__version__ = "0.1.0"

"""TCP socket options read from ``network.tcp.*`` settings."""

import logging
import socket

from pydantic import BaseModel, field_validator

from ..core.config import Settings, parse_byte_size
from ..core.exceptions import ConfigurationError
from ..core.types import TcpSettingKeys

logger = logging.getLogger(__name__)


class TcpSettings(BaseModel):
    """TCP options for sockets opened on the resolved addresses.

    Options left as None keep the operating system default.
    """

    no_delay: bool | None = None
    keep_alive: bool | None = None
    reuse_address: bool | None = None
    send_buffer_size: int | None = None
    receive_buffer_size: int | None = None

    model_config = {"frozen": True}

    @field_validator("send_buffer_size", "receive_buffer_size", mode="before")
    @classmethod
    def parse_size(cls, value, info):
        if value is None:
            return None
        key = f"network.tcp.{info.field_name}"
        size = parse_byte_size(key, value)
        if size <= 0:
            raise ConfigurationError(key, "buffer size must be positive")
        return size

    @classmethod
    def from_settings(cls, settings: Settings) -> "TcpSettings":
        """Build TCP options from a settings store."""
        return cls(
            no_delay=settings.get_bool(TcpSettingKeys.TCP_NO_DELAY),
            keep_alive=settings.get_bool(TcpSettingKeys.TCP_KEEP_ALIVE),
            reuse_address=settings.get_bool(TcpSettingKeys.TCP_REUSE_ADDRESS),
            send_buffer_size=settings.get(TcpSettingKeys.TCP_SEND_BUFFER_SIZE),
            receive_buffer_size=settings.get(TcpSettingKeys.TCP_RECEIVE_BUFFER_SIZE),
        )

    def socket_options(self) -> list[tuple[int, int, int]]:
        """``(level, option, value)`` triples for the configured options."""
        options = []
        if self.no_delay is not None:
            options.append((socket.IPPROTO_TCP, socket.TCP_NODELAY, int(self.no_delay)))
        if self.keep_alive is not None:
            options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(self.keep_alive)))
        if self.reuse_address is not None:
            options.append((socket.SOL_SOCKET, socket.SO_REUSEADDR, int(self.reuse_address)))
        if self.send_buffer_size is not None:
            options.append((socket.SOL_SOCKET, socket.SO_SNDBUF, self.send_buffer_size))
        if self.receive_buffer_size is not None:
            options.append((socket.SOL_SOCKET, socket.SO_RCVBUF, self.receive_buffer_size))
        return options

    def apply(self, sock: socket.socket) -> None:
        """Set the configured options on a socket."""
        for level, option, value in self.socket_options():
            sock.setsockopt(level, option, value)
        logger.debug(f"Applied TCP options {self.model_dump(exclude_none=True)}")

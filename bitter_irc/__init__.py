"""Client session manager for a single Twitch IRC channel."""

from .digesters import custom_logger, logger_digester  # noqa: F401
from .errors import (  # noqa: F401
    ChannelError,
    CodecError,
    HandshakeError,
    InternalError,
    TransportError,
)
from .irc import Channel, ChannelWriter, Config, Digester, Message  # noqa: F401

__all__ = [
    "Channel",
    "ChannelError",
    "ChannelWriter",
    "CodecError",
    "Config",
    "Digester",
    "HandshakeError",
    "InternalError",
    "Message",
    "TransportError",
    "custom_logger",
    "logger_digester",
]

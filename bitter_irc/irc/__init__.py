"""IRC subsystem package.

Contains the frame codec, message models, config, digester dispatch and the
channel session for Twitch IRC.
"""

from .channel import Channel, ChannelWriter  # noqa: F401
from .codec import (  # noqa: F401
    Frame,
    FrameDecoder,
    FrameEncoder,
    Prefix,
    format_frame,
    parse_frame,
)
from .config import Config  # noqa: F401
from .dispatcher import Digester, IRCDispatcher  # noqa: F401
from .models import ConnectionState, Message, pong_message  # noqa: F401

__all__ = [
    "Channel",
    "ChannelWriter",
    "Config",
    "ConnectionState",
    "Digester",
    "Frame",
    "FrameDecoder",
    "FrameEncoder",
    "IRCDispatcher",
    "Message",
    "Prefix",
    "format_frame",
    "parse_frame",
    "pong_message",
]

"""Centralized internal error hierarchy.

These exceptions give the channel session semantic failure categories. Raw
``OSError`` / ``asyncio`` failures never leave the package unwrapped; they are
translated at the transport and codec boundaries.

Classes:
  InternalError   – Base for all internal errors.
  TransportError  – Dial, read, write, deadline and EOF failures.
  CodecError      – Malformed inbound frame or unencodable outbound frame.
  HandshakeError  – Any failure while authenticating against the server.
  ChannelError    – Terminal receive-loop failure tagged with its channel.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.channel import Channel


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class TransportError(InternalError):
    """Exception raised for transport layer failures.

    This covers dialing the server, reading or writing the stream, the idle
    read deadline expiring and the server closing the connection. It is fatal
    to the current session instance.
    """


class CodecError(InternalError):
    """Exception raised when a frame cannot be decoded or encoded.

    Fatal to the receive loop on decode; reported to the caller on send.
    """


class HandshakeError(InternalError):
    """Exception raised when the authentication handshake cannot be sent.

    Partially sent handshakes are not rolled back; the owner must run
    connect and authenticate again from scratch.
    """


class ChannelError(InternalError):
    """Terminal receive-loop failure tagged with the originating channel.

    Lets an external supervisor correlate failures to sessions without a
    global registry.

    Attributes:
        channel: The channel whose loop terminated.
        cause: The underlying error (also chained as ``__cause__``).
    """

    def __init__(self, channel: Channel, cause: BaseException) -> None:
        name = getattr(getattr(channel, "config", None), "channel_name", "?")
        super().__init__(
            f"#{name}: {cause}",
            data={"channel": name, "error_type": type(cause).__name__},
        )
        self.channel = channel
        self.cause = cause
        self.__cause__ = cause


__all__ = [
    "InternalError",
    "TransportError",
    "CodecError",
    "HandshakeError",
    "ChannelError",
]

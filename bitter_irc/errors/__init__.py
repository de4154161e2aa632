from .internal import (  # noqa: F401
    ChannelError,
    CodecError,
    HandshakeError,
    InternalError,
    TransportError,
)

__all__ = [
    "InternalError",
    "TransportError",
    "CodecError",
    "HandshakeError",
    "ChannelError",
]

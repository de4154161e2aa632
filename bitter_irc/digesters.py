"""Sample digesters that echo chat messages to a text stream."""

from __future__ import annotations

import sys
from typing import TextIO

from .irc.channel import ChannelWriter
from .irc.dispatcher import Digester
from .irc.models import Message

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format(message: Message) -> str | None:
    if not message.username or not message.content:
        return None
    stamp = message.time.strftime(TIME_FORMAT) if message.time else ""
    return f"\n{stamp} {message.username}: {message.content}"


def logger_digester(message: Message, writer: ChannelWriter) -> None:
    """Echo user messages to stdout."""
    line = _format(message)
    if line is not None:
        sys.stdout.write(line)


def custom_logger(stream: TextIO) -> Digester:
    """Return a digester that writes user messages to ``stream``."""

    def digest(message: Message, writer: ChannelWriter) -> None:
        line = _format(message)
        if line is not None:
            stream.write(line)

    return digest

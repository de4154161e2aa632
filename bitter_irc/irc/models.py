"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..constants import TWITCH_IRC_URI, TWITCH_PONG_PAYLOAD
from .codec import Frame, Prefix

if TYPE_CHECKING:  # pragma: no cover
    from .config import Config

PING = "PING"
PONG = "PONG"
PRIVMSG = "PRIVMSG"
RECONNECT = "RECONNECT"


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    READY = auto()
    RECONNECTING = auto()


@dataclass
class Message:
    """A decoded inbound or constructed outbound chat event.

    Sender fields stay empty when the wire frame had no prefix. ``time`` is
    the receipt time for inbound messages and is unused on send.
    """

    name: str = ""
    username: str = ""
    content: str = ""
    command: str = ""
    params: list[str] = field(default_factory=list)
    host: str = ""
    time: datetime | None = None
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def is_chat(self) -> bool:
        return self.command.upper() == PRIVMSG and bool(self.username)

    @classmethod
    def from_frame(cls, frame: Frame) -> Message:
        message = cls(
            content=frame.trailing,
            command=frame.command,
            params=list(frame.params),
            time=datetime.now(UTC),
            tags=dict(frame.tags),
        )
        if frame.prefix is not None:
            message.name = frame.prefix.name
            message.username = frame.prefix.user
            message.host = frame.prefix.host
        return message

    def to_frame(self) -> Frame:
        prefix = None
        if self.name or self.username or self.host:
            prefix = Prefix(name=self.name, user=self.username, host=self.host)
        return Frame(
            command=self.command,
            params=list(self.params),
            trailing=self.content,
            prefix=prefix,
        )


def pong_message(config: Config) -> Message:
    """Reply to a server PING, identified as the configured user."""
    return Message(
        name=config.username,
        username=config.username,
        host=TWITCH_IRC_URI,
        command=PONG,
        content=TWITCH_PONG_PAYLOAD,
    )

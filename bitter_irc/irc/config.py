"""Immutable connection parameters for a channel session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..constants import (
    CHANNEL_PREFIX,
    IRC_CONNECT_TIMEOUT,
    IRC_DEFAULT_CAPABILITIES,
    IRC_IDLE_TIMEOUT,
    TWITCH_IRC_SERVER,
    TWITCH_IRC_TLS_SERVER,
)

OAUTH_PREFIX = "oauth:"


@dataclass(frozen=True, slots=True)
class Config:
    channel_name: str
    server: str
    username: str
    oauth_token: str
    tls: bool = False
    idle_timeout: float = IRC_IDLE_TIMEOUT
    capabilities: tuple[str, ...] = IRC_DEFAULT_CAPABILITIES
    connect_timeout: float = IRC_CONNECT_TIMEOUT

    @classmethod
    def twitch(
        cls,
        channel_name: str,
        username: str,
        token: str,
        tls: bool = False,
        **overrides: Any,
    ) -> Config:
        """Build a config pointing at Twitch's default plain or TLS server."""
        server = TWITCH_IRC_TLS_SERVER if tls else TWITCH_IRC_SERVER
        return cls(
            channel_name=channel_name,
            server=overrides.pop("server", server),
            username=username,
            oauth_token=token,
            tls=tls,
            **overrides,
        )

    @property
    def host(self) -> str:
        return self.server.rpartition(":")[0] or self.server

    @property
    def port(self) -> int:
        host, sep, port = self.server.rpartition(":")
        if not sep or not host:
            raise ValueError(f"server address must be host:port, got {self.server!r}")
        return int(port)

    @property
    def channel(self) -> str:
        """Channel name with the provider's channel marker."""
        if self.channel_name.startswith(CHANNEL_PREFIX):
            return self.channel_name
        return f"{CHANNEL_PREFIX}{self.channel_name}"

    @property
    def oauth_password(self) -> str:
        if self.oauth_token.startswith(OAUTH_PREFIX):
            return self.oauth_token
        return f"{OAUTH_PREFIX}{self.oauth_token}"

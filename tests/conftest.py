import asyncio

import pytest_asyncio

from bitter_irc.irc.config import Config
from tests.fixtures.irc_fixtures import CHANNEL, READ_TIMEOUT, TOKEN, USERNAME


class FakeIRCServer:
    """Loopback TCP server standing in for the Twitch IRC endpoint."""

    def __init__(self) -> None:
        self.server: asyncio.base_events.Server | None = None
        self.port = 0
        self._clients: asyncio.Queue[FakeClient] = asyncio.Queue()
        self._all: list[FakeClient] = []

    async def start(self) -> None:
        self.server = await asyncio.start_server(self._on_client, "127.0.0.1", 0)
        self.port = self.server.sockets[0].getsockname()[1]

    async def _on_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        client = FakeClient(reader, writer)
        self._all.append(client)
        await self._clients.put(client)

    @property
    def address(self) -> str:
        return f"127.0.0.1:{self.port}"

    @property
    def connection_count(self) -> int:
        return len(self._all)

    async def accept(self) -> "FakeClient":
        return await asyncio.wait_for(self._clients.get(), timeout=READ_TIMEOUT)

    def config(self, **overrides) -> Config:
        params = {
            "channel_name": CHANNEL,
            "server": self.address,
            "username": USERNAME,
            "oauth_token": TOKEN,
        }
        params.update(overrides)
        return Config(**params)

    async def close(self) -> None:
        for client in self._all:
            client.close()
        if self.server is not None:
            self.server.close()


class FakeClient:
    def __init__(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.reader = reader
        self.writer = writer

    async def read_line(self) -> str:
        raw = await asyncio.wait_for(self.reader.readline(), timeout=READ_TIMEOUT)
        return raw.decode("utf-8").rstrip("\r\n")

    async def read_lines(self, count: int) -> list[str]:
        return [await self.read_line() for _ in range(count)]

    async def send(self, line: str) -> None:
        self.writer.write(f"{line}\r\n".encode())
        await self.writer.drain()

    def close(self) -> None:
        if not self.writer.is_closing():
            self.writer.close()


@pytest_asyncio.fixture
async def irc_server():
    server = FakeIRCServer()
    await server.start()
    yield server
    await server.close()

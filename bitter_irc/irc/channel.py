"""Twitch channel session: connect, authenticate, listen, reconnect, send."""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Iterable
from typing import Any, Protocol

from ..constants import IRC_MAX_LINE_BYTES
from ..errors import (
    ChannelError,
    CodecError,
    HandshakeError,
    InternalError,
    TransportError,
)
from ..logs.logger import logger
from .codec import Frame, FrameDecoder, FrameEncoder
from .config import Config
from .dispatcher import Digester, IRCDispatcher
from .models import (
    PING,
    PRIVMSG,
    RECONNECT,
    ConnectionState,
    Message,
    pong_message,
)


class ChannelWriter(Protocol):
    """Send-only view of a channel handed to digesters."""

    @property
    def config(self) -> Config:
        """Read-only connection parameters of the channel."""
        ...

    async def send(self, content: str) -> None:
        """Send a chat message to the channel as the configured user."""
        ...

    async def send_message(self, message: Message) -> None:
        """Encode and write one message as a single frame."""
        ...

    async def send_command(
        self, command: str, params: Iterable[str] = (), content: str = ""
    ) -> None:
        """Encode and write a raw command frame."""
        ...


class Encoder(Protocol):
    """Anything that writes one frame per call, such as ``FrameEncoder``."""

    async def encode(self, frame: Frame) -> None: ...


class _ChannelWriterView:
    __slots__ = ("_channel",)

    def __init__(self, channel: Channel) -> None:
        self._channel = channel

    @property
    def config(self) -> Config:
        return self._channel.config

    async def send(self, content: str) -> None:
        await self._channel.send(content)

    async def send_message(self, message: Message) -> None:
        await self._channel.send_message(message)

    async def send_command(
        self, command: str, params: Iterable[str] = (), content: str = ""
    ) -> None:
        await self._channel.send_command(command, params, content)


class Channel:  # pylint: disable=too-many-instance-attributes
    """One logical membership in a Twitch IRC channel.

    Constructing a channel opens nothing; ``connect`` dials the server and
    ``authenticate`` sends the handshake. ``listen`` owns the read side of the
    transport until ``disconnect`` is requested or a terminal error occurs,
    and closes the transport on the way out.
    """

    def __init__(self, config: Config, *digesters: Digester) -> None:
        self.config = config
        self.digesters: tuple[Digester, ...] = tuple(digesters)
        self.state = ConnectionState.DISCONNECTED
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._encoder: Encoder | None = None
        # Cleared while a handshake is being written; public sends wait on it.
        self._handshake_done = asyncio.Event()
        self._handshake_done.set()
        self._decoder: FrameDecoder | None = None
        self._stop = asyncio.Event()
        self._stop_taken = asyncio.Event()
        self._listening = False
        self._writer_view = _ChannelWriterView(self)
        self._dispatcher = IRCDispatcher(self._writer_view, self.digesters)

    @classmethod
    def twitch(
        cls,
        channel_name: str,
        username: str,
        token: str,
        *digesters: Digester,
        tls: bool = False,
        **overrides: Any,
    ) -> Channel:
        """Create a channel against Twitch's default server and port."""
        config = Config.twitch(channel_name, username, token, tls=tls, **overrides)
        return cls(config, *digesters)

    @property
    def connected(self) -> bool:
        return self.writer is not None

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def pending_digesters(self) -> int:
        return self._dispatcher.pending

    def set_encoder(self, encoder: Encoder) -> None:
        """Replace the frame encoder bound by ``connect``.

        Not safe while sends are in flight.
        """
        self._encoder = encoder

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.config.username,
                channel=self.config.channel_name,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def connect(self) -> None:
        """Open the transport and bind the frame codec over it.

        A previously bound transport is replaced and closed.

        Raises:
            TransportError: If the server cannot be reached in time.
        """
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc",
            "connect_start",
            user=self.config.username,
            channel=self.config.channel_name,
            server=self.config.server,
            tls=self.config.tls,
        )
        ssl_context = ssl.create_default_context() if self.config.tls else None
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(
                    self.config.host,
                    self.config.port,
                    ssl=ssl_context,
                    limit=IRC_MAX_LINE_BYTES,
                ),
                timeout=self.config.connect_timeout,
            )
        except TimeoutError as e:
            logger.log_event(
                "irc",
                "connect_timeout",
                level=logging.ERROR,
                user=self.config.username,
                channel=self.config.channel_name,
                timeout=self.config.connect_timeout,
            )
            if self.writer is None:
                self._set_state(ConnectionState.DISCONNECTED)
            raise TransportError(
                f"timed out connecting to {self.config.server}",
                data={"server": self.config.server},
            ) from e
        except (OSError, ValueError) as e:
            logger.log_event(
                "irc",
                "connect_network_error",
                level=logging.ERROR,
                user=self.config.username,
                channel=self.config.channel_name,
                error=str(e),
            )
            if self.writer is None:
                self._set_state(ConnectionState.DISCONNECTED)
            raise TransportError(
                f"failed to connect to {self.config.server}: {e}",
                data={"server": self.config.server},
            ) from e

        previous = self.writer
        self.reader, self.writer = reader, writer
        self._decoder = FrameDecoder(reader)
        self._encoder = FrameEncoder(writer)
        if previous is not None:
            await self._close_writer(previous)
        logger.log_event(
            "irc",
            "connection_established",
            level=logging.DEBUG,
            user=self.config.username,
            channel=self.config.channel_name,
        )

    def _handshake_frames(self) -> list[Frame]:
        frames = [
            Frame(command="PASS", params=[self.config.oauth_password]),
            Frame(command="NICK", params=[self.config.username]),
            Frame(command="JOIN", params=[self.config.channel]),
        ]
        # Twitch specific capability registration
        frames.extend(
            Frame(command="CAP", params=["REQ"], trailing=capability)
            for capability in self.config.capabilities
        )
        return frames

    async def authenticate(self) -> None:
        """Send PASS, NICK, JOIN and the capability requests, in that order.

        Raises:
            HandshakeError: If called before ``connect`` or if any frame fails.
                Frames already written are not rolled back.
        """
        if self._encoder is None:
            raise HandshakeError("authenticate called before connect")
        self._set_state(ConnectionState.AUTHENTICATING)
        self._handshake_done.clear()
        try:
            await self._write_handshake()
        finally:
            self._handshake_done.set()
        self._set_state(ConnectionState.READY)
        logger.log_event(
            "irc",
            "auth_sent",
            user=self.config.username,
            channel=self.config.channel_name,
        )

    async def _write_handshake(self) -> None:
        encoder = self._encoder
        if encoder is None:
            raise HandshakeError("transport released during handshake")
        for frame in self._handshake_frames():
            try:
                await encoder.encode(frame)
            except (CodecError, TransportError) as e:
                logger.log_event(
                    "irc",
                    "auth_failed",
                    level=logging.ERROR,
                    user=self.config.username,
                    channel=self.config.channel_name,
                    command=frame.command,
                    error=str(e),
                )
                raise HandshakeError(
                    f"handshake failed at {frame.command}: {e}",
                    data={"command": frame.command},
                ) from e

    async def reconnect(self) -> None:
        """Run ``connect`` and ``authenticate`` again with the same config.

        Sends issued while this runs wait until the new handshake is written.
        """
        self._set_state(ConnectionState.RECONNECTING)
        logger.log_event(
            "irc",
            "reconnect_start",
            level=logging.WARNING,
            user=self.config.username,
            channel=self.config.channel_name,
        )
        self._handshake_done.clear()
        try:
            await self.connect()
            await self.authenticate()
        finally:
            self._handshake_done.set()
        logger.log_event(
            "irc",
            "reconnect_success",
            user=self.config.username,
            channel=self.config.channel_name,
        )

    async def disconnect(self) -> None:
        """Ask the receive loop to stop at its next iteration boundary.

        Returns once the loop has taken the signal; the loop closes the
        transport itself. Without a running loop the signal stays pending and
        the next ``listen`` returns immediately.
        """
        logger.log_event(
            "irc",
            "disconnect_requested",
            level=logging.DEBUG,
            user=self.config.username,
            channel=self.config.channel_name,
        )
        self._stop_taken.clear()
        self._stop.set()
        if self._listening:
            await self._stop_taken.wait()

    async def send(self, content: str) -> None:
        await self.send_message(
            Message(
                name=self.config.username,
                username=self.config.username,
                content=content,
                command=PRIVMSG,
                params=[self.config.channel],
            )
        )

    async def send_command(
        self, command: str, params: Iterable[str] = (), content: str = ""
    ) -> None:
        await self.send_message(
            Message(command=command, params=list(params), content=content)
        )

    async def send_message(self, message: Message) -> None:
        """Encode ``message`` and write it as one frame.

        Waits while a handshake is being written so the frame follows it.

        Raises:
            CodecError: If the message cannot be represented on the wire.
            TransportError: If not connected or the write fails.
        """
        await self._handshake_done.wait()
        await self._write(message)

    async def _write(self, message: Message) -> None:
        encoder = self._encoder
        if encoder is None:
            raise TransportError("send called before connect")
        await encoder.encode(message.to_frame())
        logger.log_event(
            "irc",
            "send",
            level=logging.DEBUG,
            user=self.config.username,
            channel=self.config.channel_name,
            command=message.command,
        )

    async def listen(self) -> None:
        """Decode and handle frames until disconnected or a terminal error.

        Returns ``None`` after a requested disconnect.

        Raises:
            ChannelError: Wrapping the ``TransportError``/``CodecError``/
                ``HandshakeError`` that terminated the loop.
        """
        if self._decoder is None:
            raise ChannelError(self, TransportError("listen called before connect"))
        self._listening = True
        logger.log_event(
            "irc",
            "listen_start",
            level=logging.DEBUG,
            user=self.config.username,
            channel=self.config.channel_name,
        )
        try:
            await self._receive()
        except InternalError as e:
            logger.log_event(
                "irc",
                "listen_error",
                level=logging.ERROR,
                user=self.config.username,
                channel=self.config.channel_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ChannelError(self, e) from e
        finally:
            self._listening = False
            # Release any disconnect caller even if the loop ended on an error.
            self._stop.clear()
            self._stop_taken.set()
            await self._close_transport()

    async def _receive(self) -> None:
        while True:
            if self._stop.is_set():
                self._stop.clear()
                self._stop_taken.set()
                logger.log_event(
                    "irc",
                    "listen_stopped",
                    user=self.config.username,
                    channel=self.config.channel_name,
                )
                return
            decoder = self._decoder
            if decoder is None:
                raise TransportError("transport released while listening")
            try:
                frame = await asyncio.wait_for(
                    decoder.decode(), timeout=self.config.idle_timeout
                )
            except TimeoutError as e:
                if self._stop.is_set():
                    continue
                raise TransportError(
                    f"no data from server for {self.config.idle_timeout}s",
                    data={"idle_timeout": self.config.idle_timeout},
                ) from e
            except InternalError:
                if self._stop.is_set():
                    continue
                raise
            await self._handle_frame(frame)

    async def _handle_frame(self, frame: Frame) -> None:
        command = frame.command.upper()
        if command == PING:
            await self._write(pong_message(self.config))
            logger.log_event(
                "irc",
                "ping_answered",
                level=logging.DEBUG,
                user=self.config.username,
                channel=self.config.channel_name,
            )
            return

        # Twitch restarting its IRC servers.
        if command == RECONNECT:
            logger.log_event(
                "irc",
                "reconnect_directive",
                level=logging.WARNING,
                user=self.config.username,
                channel=self.config.channel_name,
            )
            await self.reconnect()
            return

        message = Message.from_frame(frame)
        if message.is_chat:
            logger.log_event(
                "irc",
                "privmsg",
                level=logging.DEBUG,
                user=self.config.username,
                channel=self.config.channel_name,
                author=message.username,
                chat_message=message.content,
            )
        self._dispatcher.dispatch(message)

    async def drain_digesters(self) -> None:
        """Wait for every in-flight digester invocation to finish."""
        await self._dispatcher.drain()

    async def _close_transport(self) -> None:
        writer = self.writer
        self.writer = None
        self.reader = None
        self._encoder = None
        self._decoder = None
        if writer is not None:
            await self._close_writer(writer)
        self._handshake_done.set()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.log_event(
            "irc",
            "disconnected",
            level=logging.WARNING,
            user=self.config.username,
            channel=self.config.channel_name,
        )

    async def _close_writer(self, writer: asyncio.StreamWriter) -> None:
        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "irc",
                "close_error",
                level=logging.DEBUG,
                user=self.config.username,
                channel=self.config.channel_name,
                error=str(e),
            )

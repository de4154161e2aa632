"""Fire-and-forget delivery of inbound messages to digesters."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from ..logs.logger import logger
from .models import Message

if TYPE_CHECKING:  # pragma: no cover
    from .channel import ChannelWriter

Digester = Callable[[Message, "ChannelWriter"], Any]


class IRCDispatcher:
    """Spawns one task per digester per message and never waits on them.

    Digesters may be plain callables or coroutine functions. There is no
    ordering between digesters or across messages, and no bound on the
    number of in-flight invocations; a slow digester never stalls the
    receive loop.
    """

    def __init__(self, writer: ChannelWriter, digesters: Sequence[Digester]) -> None:
        self.writer = writer
        self.digesters: tuple[Digester, ...] = tuple(digesters)
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, message: Message) -> None:
        for digester in self.digesters:
            task = asyncio.create_task(self._invoke(digester, message))
            # Hold a reference until done so the task is not collected mid-flight.
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _invoke(self, digester: Digester, message: Message) -> None:
        try:
            result = digester(message, self.writer)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "digester_error",
                level=logging.ERROR,
                user=self.writer.config.username,
                channel=self.writer.config.channel_name,
                digester=getattr(digester, "__name__", repr(digester)),
                error=str(e),
                error_type=type(e).__name__,
            )

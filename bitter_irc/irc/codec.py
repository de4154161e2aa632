"""IRC frame codec over asyncio streams.

``parse_frame`` / ``format_frame`` convert between a single wire line and a
``Frame``. ``FrameDecoder`` and ``FrameEncoder`` bind those to a stream pair.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from ..errors import CodecError, TransportError

CRLF = "\r\n"


@dataclass(slots=True)
class Prefix:
    name: str = ""
    user: str = ""
    host: str = ""

    def __str__(self) -> str:
        out = self.name
        if self.user:
            out += f"!{self.user}"
        if self.host:
            out += f"@{self.host}"
        return out


@dataclass
class Frame:
    command: str
    params: list[str] = field(default_factory=list)
    trailing: str = ""
    prefix: Prefix | None = None
    tags: dict[str, str] = field(default_factory=dict)


def parse_prefix(raw: str) -> Prefix:
    """Split ``nick!user@host`` into its parts; a bare server name is a name."""
    name, _, host = raw.partition("@")
    name, _, user = name.partition("!")
    return Prefix(name=name, user=user, host=host)


def parse_frame(raw_line: str) -> Frame:
    line = raw_line.rstrip("\r\n")
    tags: dict[str, str] = {}
    prefix: Prefix | None = None
    trailing = ""

    if line.startswith("@"):
        tags_part, _, line = line.partition(" ")
        tags = _parse_tags(tags_part[1:])

    if line.startswith(":"):
        raw_prefix, _, line = line[1:].partition(" ")
        prefix = parse_prefix(raw_prefix)

    if line.startswith(":"):
        line, trailing = "", line[1:]
    elif " :" in line:
        line, trailing = line.split(" :", 1)

    parts = line.split()
    if not parts:
        raise CodecError(f"frame has no command: {raw_line!r}", data={"raw": raw_line})

    return Frame(
        command=parts[0],
        params=parts[1:],
        trailing=trailing,
        prefix=prefix,
        tags=tags,
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = _unescape_tag(v)
    return tags


_TAG_ESCAPES = {":": ";", "s": " ", "\\": "\\", "r": "\r", "n": "\n"}


def _unescape_tag(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append(_TAG_ESCAPES.get(nxt, nxt))
    return "".join(out)


def format_frame(frame: Frame) -> str:
    """Render ``frame`` as one wire line without the CRLF terminator.

    Raises:
        CodecError: If the command is empty, a middle parameter is not a
            single token, or any field contains a line break.
    """
    if not frame.command or " " in frame.command:
        raise CodecError(f"invalid command: {frame.command!r}")
    pieces: list[str] = []
    if frame.prefix is not None:
        pieces.append(f":{frame.prefix}")
    pieces.append(frame.command)
    for param in frame.params:
        if not param or " " in param or param.startswith(":"):
            raise CodecError(f"invalid middle parameter: {param!r}")
        pieces.append(param)
    if frame.trailing:
        pieces.append(f":{frame.trailing}")
    line = " ".join(pieces)
    if "\r" in line or "\n" in line or "\0" in line:
        raise CodecError("frame contains a line break", data={"command": frame.command})
    return line


class FrameDecoder:
    """Reads one frame per ``decode()`` call from a stream reader."""

    def __init__(self, reader: asyncio.StreamReader) -> None:
        self.reader = reader

    async def decode(self) -> Frame:
        while True:
            try:
                raw = await self.reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                raise TransportError("connection closed by server") from e
            except asyncio.LimitOverrunError as e:
                raise CodecError("frame exceeds maximum line length") from e
            except OSError as e:
                raise TransportError(f"read failed: {e}") from e
            line = raw.decode("utf-8", errors="replace").strip("\r\n")
            # Blank keep-alive lines carry no frame.
            if line.strip():
                return parse_frame(line)


class FrameEncoder:
    """Writes whole frames to a stream writer, one frame per ``encode()``.

    A single lock serializes concurrent writers so each frame's bytes appear
    contiguously on the wire.
    """

    def __init__(self, writer: asyncio.StreamWriter) -> None:
        self.writer = writer
        self._lock = asyncio.Lock()

    async def encode(self, frame: Frame) -> None:
        data = (format_frame(frame) + CRLF).encode("utf-8")
        async with self._lock:
            try:
                self.writer.write(data)
                await self.writer.drain()
            except OSError as e:
                raise TransportError(f"write failed: {e}") from e

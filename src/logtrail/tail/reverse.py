"""Backward line reading — newest lines first without loading the whole file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from logtrail.tail.models import SeekOrigin

CHUNK_SIZE = 8192


def decode_line(raw: bytes) -> str:
    """Decode one raw line: UTF-8, or Latin-1 when the bytes are not valid UTF-8."""
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def resolve_offset(size: int, offset: int, origin: SeekOrigin) -> int:
    """Absolute position for ``offset`` relative to ``origin``, clamped to the file.

    A freshly opened handle sits at 0, so CURRENT behaves like START.
    """
    if origin == SeekOrigin.END:
        position = size + offset
    else:
        position = offset
    return max(0, min(position, size))


class ReverseLineReader:
    """Yields ``(start_offset, raw_bytes)`` for each line ending before ``end``.

    Lines come out newest first. Reaching the beginning of the file acts as a
    newline, so the topmost line is always yielded (possibly empty).
    ``position`` is the start offset of the line most recently yielded, and
    ends at 0 once the whole range was read.
    """

    def __init__(self, handle: BinaryIO, end: int, chunk_size: int = CHUNK_SIZE) -> None:
        self._handle = handle
        self._end = end
        self._chunk_size = chunk_size
        self.position = end

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        pos = self._end
        tail = b""
        while pos > 0:
            size = min(self._chunk_size, pos)
            pos -= size
            self._handle.seek(pos)
            chunk = self._handle.read(size) + tail
            parts = chunk.split(b"\n")
            tail = parts[0]
            line_end = pos + len(chunk)
            for part in reversed(parts[1:]):
                start = line_end - len(part)
                self.position = start
                yield start, part
                line_end = start - 1
        self.position = 0
        yield 0, tail


def lines_from_bottom(path: str | Path, count: int = 1) -> list[str]:
    """Return the last ``count`` non-empty lines of a file, newest first."""
    count = max(1, int(count))
    lines: list[str] = []
    with open(path, "rb") as handle:
        end = handle.seek(0, SeekOrigin.END)
        for _, raw in ReverseLineReader(handle, end):
            line = decode_line(raw)
            if not line:
                continue
            lines.append(line)
            if len(lines) >= count:
                break
    return lines

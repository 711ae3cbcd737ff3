"""Block mode — records span every line from one block-start marker to the next."""

from __future__ import annotations

import logging
import os
import re
from typing import BinaryIO

from logtrail.tail.base import ScanContext, line_fingerprint
from logtrail.tail.budget import TimeBudget
from logtrail.tail.models import ScanRequest, ScanResult
from logtrail.tail.patterns import compile_block_marker
from logtrail.tail.reverse import decode_line, resolve_offset

logger = logging.getLogger(__name__)

# How far back from EOF an incremental poll looks for the previous block start
BLOCK_LOOKBACK = 65536


def _text(raw: bytes) -> str:
    return decode_line(raw.rstrip(b"\n"))


class BlockModeReader:
    """Reads forward, grouping raw lines into blocks."""

    def scan(self, request: ScanRequest, budget: TimeBudget | None = None) -> ScanResult:
        ctx = ScanContext(request, budget)
        result = ctx.result
        marker = compile_block_marker(request.block_start)

        with open(request.path, "rb") as handle:
            size = handle.seek(0, os.SEEK_END)
            handle.seek(self._start_position(handle, request, size, marker, result))

            block: list[str] = []
            block_start = 0
            cursor = handle.tell()

            while True:
                line_start = handle.tell()
                raw = handle.readline()
                if not raw:
                    break
                line = _text(raw)

                if marker.search(line):
                    if block:
                        self._close_block(ctx, block, block_start)
                        if ctx.done:
                            # The block opened by this line is left for the next call
                            cursor = line_start
                            break
                    block = [line]
                    block_start = line_start
                elif block:
                    block.append(line)

                result.bytes += len(raw)
                cursor = handle.tell()

                if ctx.budget.exceeded():
                    logger.debug(
                        "Block scan of %s aborted after %dms",
                        request.path,
                        ctx.budget.elapsed_ms,
                    )
                    result.aborted = True
                    break

            # The trailing block has no closing marker yet
            if block and not ctx.done:
                self._close_block(ctx, block, block_start)

            result.last_parsed_offset = cursor

        if not request.load_more and not request.full:
            result.records.reverse()
        return result

    def _start_position(
        self,
        handle: BinaryIO,
        request: ScanRequest,
        size: int,
        marker: re.Pattern[str],
        result: ScanResult,
    ) -> int:
        if request.load_more:
            return resolve_offset(size, request.start_offset, request.origin)
        if request.full:
            return 0

        read_from = max(0, size - max(request.data_to_parse, BLOCK_LOOKBACK))
        handle.seek(read_from)
        first = handle.readline()
        if not first or marker.search(_text(first)):
            return read_from

        # Mid-block: those lines belong to a block delivered by an earlier poll
        position = handle.tell()
        result.bytes += len(first)
        for raw in iter(handle.readline, b""):
            if marker.search(_text(raw)):
                return position
            result.bytes += len(raw)
            position = handle.tell()
        return position

    def _close_block(self, ctx: ScanContext, block: list[str], start: int) -> None:
        text = "\n".join(block)
        extraction = ctx.extract(text)
        if extraction is None:
            ctx.result.errors += 1
            return
        # Records arrive oldest first, so the newest emitted block wins
        if ctx.accept(extraction, text, start):
            ctx.result.lastline = line_fingerprint(block[-1])

"""Line mode — one raw line per record, read backward from the cursor."""

from __future__ import annotations

import logging
import os

from logtrail.tail.base import ScanContext, line_fingerprint
from logtrail.tail.budget import TimeBudget
from logtrail.tail.models import ScanRequest, ScanResult
from logtrail.tail.reverse import ReverseLineReader, decode_line, resolve_offset

logger = logging.getLogger(__name__)


class LineModeReader:
    """Finds the records written since the caller's cursor.

    Lines are read newest first. Lines the pattern does not match are either
    counted as errors or, with a multiline token configured, attached to the
    next matching line above them.
    """

    def scan(self, request: ScanRequest, budget: TimeBudget | None = None) -> ScanResult:
        ctx = ScanContext(request, budget)
        result = ctx.result
        multiline = request.multiline
        # Older records are never compared against the previous fingerprint
        check_rotation = not request.load_more
        continuation: list[str] = []
        lastline_pending = True

        with open(request.path, "rb") as handle:
            size = handle.seek(0, os.SEEK_END)
            end = resolve_offset(size, request.start_offset, request.origin)
            reader = ReverseLineReader(handle, end)

            for offset, raw in reader:
                line = decode_line(raw)

                if line.strip():
                    result.bytes = end - offset
                    fingerprint = line_fingerprint(line)

                    if lastline_pending:
                        result.lastline = fingerprint
                        lastline_pending = False

                    if check_rotation and result.bytes > request.data_to_parse:
                        if fingerprint == request.old_lastline:
                            break
                        logger.info(
                            "%s changed since the last poll; rescanning", request.path
                        )
                        result.notice = True
                        result.full = True
                        check_rotation = False

                    extraction = ctx.extract(line)
                    if extraction is not None:
                        text = line
                        if continuation:
                            extra = "\n".join(reversed(continuation))
                            continuation.clear()
                            text = f"{line}\n{extra}"
                            if multiline in extraction.fields:
                                extraction.fields[multiline] += "\n" + extra
                        ctx.accept(extraction, text, offset)
                    elif multiline:
                        continuation.append(line)
                    else:
                        result.errors += 1

                    if ctx.done:
                        break

                if ctx.budget.exceeded():
                    logger.debug(
                        "Scan of %s aborted after %dms", request.path, ctx.budget.elapsed_ms
                    )
                    result.aborted = True
                    break

            result.last_parsed_offset = reader.position

        if request.load_more or result.full:
            result.records.reverse()
        return result

"""Tail engine — picks a reader and assembles the result envelope."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone

from logtrail.tail.block_mode import BlockModeReader
from logtrail.tail.budget import TimeBudget
from logtrail.tail.extractor import resolve_timezone
from logtrail.tail.line_mode import LineModeReader
from logtrail.tail.models import Record, ScanRequest, ScanResult

logger = logging.getLogger(__name__)

FILE_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class TailEngine:
    """Stateless entry point: one call per poll.

    Every bit of memory between polls lives in the request (cursor and
    fingerprint) and comes back in the result.
    """

    def __init__(self) -> None:
        self._line_reader = LineModeReader()
        self._block_reader = BlockModeReader()

    def scan(self, request: ScanRequest) -> ScanResult:
        """Return the new records of ``request.path``. Raises ``OSError`` on I/O failure."""
        budget = TimeBudget(request.max_search_log_time)
        reader = self._block_reader if request.block_mode else self._line_reader
        result = reader.scan(request, budget)

        result.fingerprint = records_fingerprint(result.records)
        self._fill_file_metadata(result, request)
        result.duration = budget.elapsed_ms

        logger.debug(
            "Scanned %s: %d record(s), %d skipped, %d error(s), %d bytes in %dms",
            request.path,
            result.count,
            result.skipped,
            result.errors,
            result.bytes,
            result.duration,
        )
        return result

    def _fill_file_metadata(self, result: ScanResult, request: ScanRequest) -> None:
        stat = os.stat(request.path)
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        tz = resolve_timezone(request.timezone)
        if tz is not None:
            modified = modified.astimezone(tz)
        result.filesize = stat.st_size
        result.filemodif = modified.strftime(FILE_DATE_FORMAT)
        result.filemodifu = int(stat.st_mtime)


def records_fingerprint(records: list[Record]) -> str:
    """Hash of the emitted records, so callers can skip a no-op refresh."""
    payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()

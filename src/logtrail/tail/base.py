"""Per-scan state shared by the line and block readers."""

from __future__ import annotations

import hashlib
import re

from logtrail.tail.budget import TimeBudget
from logtrail.tail.extractor import Extraction, parse_record, resolve_timezone
from logtrail.tail.fields import compile_fields
from logtrail.tail.filters import RecordFilter
from logtrail.tail.models import Record, ScanRequest, ScanResult
from logtrail.tail.patterns import compile_pattern


def line_fingerprint(line: str) -> str:
    """Identity of a log line across polls."""
    return hashlib.sha1(line.encode("utf-8")).hexdigest()


class ScanContext:
    """Compiled request plus the counters of the scan in progress.

    Everything that can be invalid in the request (pattern, field references,
    timezone) is checked here, before any file is opened.
    """

    def __init__(self, request: ScanRequest, budget: TimeBudget | None = None) -> None:
        if request.wanted < 1:
            raise ValueError(f"wanted must be at least 1, got {request.wanted}")
        self.request = request
        try:
            self.pattern = compile_pattern(request.pattern)
        except re.error as exc:
            raise ValueError(f"Invalid line pattern: {exc}") from exc
        self.specs = compile_fields(request.fields, request.types)
        self.tz = resolve_timezone(request.timezone)
        self.filter = RecordFilter(request.exclude, request.search)
        self.budget = budget or TimeBudget(request.max_search_log_time)
        self.result = ScanResult(
            search=request.search,
            regsearch=self.filter.search_is_regex,
            full=request.full,
        )

    @property
    def done(self) -> bool:
        return len(self.result.records) >= self.request.wanted

    def extract(self, text: str) -> Extraction | None:
        return parse_record(self.pattern, self.specs, text, self.tz)

    def accept(self, extraction: Extraction, raw: str, offset: int) -> bool:
        """Filter an extracted record; keep it or count it as skipped."""
        if not self.filter.passes(extraction.fields, raw):
            self.result.skipped += 1
            return False
        self.result.records.append(
            Record(
                fields=extraction.fields,
                raw=raw,
                offset=offset,
                epoch=extraction.epoch,
            )
        )
        self.result.found = True
        return True

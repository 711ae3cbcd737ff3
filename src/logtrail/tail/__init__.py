"""Incremental tailing engine: backward line scans, block scans, field extraction."""

from logtrail.tail.engine import TailEngine
from logtrail.tail.models import Record, ScanRequest, ScanResult, SeekOrigin
from logtrail.tail.reverse import lines_from_bottom

__all__ = [
    "Record",
    "ScanRequest",
    "ScanResult",
    "SeekOrigin",
    "TailEngine",
    "lines_from_bottom",
]

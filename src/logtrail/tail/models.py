"""Tail data models — scan requests, records and scan results."""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass, field
from typing import Any


class SeekOrigin(enum.IntEnum):
    """Where ``start_offset`` is measured from. Mirrors ``os.SEEK_*``."""

    START = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END


@dataclass
class ScanRequest:
    """Everything one poll needs. Built by the caller, never mutated by the engine.

    ``fields`` maps each token to a capture reference: a group index or name,
    a list of literal strings and group indexes, or (for date tokens) a
    mapping of date components to groups.
    """

    path: str
    pattern: re.Pattern[str] | str
    fields: dict[str, Any]
    types: dict[str, str] = field(default_factory=dict)
    timezone: str | None = None
    wanted: int = 10
    exclude: dict[str, list[str]] = field(default_factory=dict)
    start_offset: int = 0
    origin: SeekOrigin = SeekOrigin.END
    load_more: bool = False
    old_lastline: str = ""
    multiline: str = ""
    search: str = ""
    data_to_parse: int = 0
    full: bool = False
    max_search_log_time: float | None = 5.0
    block_start: re.Pattern[str] | str = ""

    @property
    def block_mode(self) -> bool:
        if isinstance(self.block_start, re.Pattern):
            return True
        return self.block_start != ""


@dataclass
class Record:
    """One logical log entry after reconstruction and field extraction."""

    fields: dict[str, str]
    raw: str
    offset: int
    epoch: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.fields)
        data["pml"] = self.raw
        data["pmlo"] = self.offset
        if self.epoch is not None:
            data["pmld"] = self.epoch
        return data


@dataclass
class ScanResult:
    """Outcome of one poll, plus the cursor for the next one.

    The caller keeps ``last_parsed_offset`` and ``lastline`` and hands them
    back as ``start_offset`` / ``old_lastline``.
    """

    records: list[Record] = field(default_factory=list)
    found: bool = False
    aborted: bool = False
    regsearch: bool = False
    search: str = ""
    full: bool = False
    notice: bool = False
    last_parsed_offset: int = 0
    bytes: int = 0
    skipped: int = 0
    errors: int = 0
    fingerprint: str = ""
    lastline: str = ""
    duration: int = 0
    filesize: int = 0
    filemodif: str = ""
    filemodifu: int = 0

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Render the envelope with the short keys callers persist."""
        return {
            "logs": [r.to_dict() for r in self.records],
            "found": self.found,
            "abort": self.aborted,
            "regsearch": self.regsearch,
            "search": self.search,
            "full": self.full,
            "notice": self.notice,
            "lpo": self.last_parsed_offset,
            "count": self.count,
            "bytes": self.bytes,
            "skiplines": self.skipped,
            "errorlines": self.errors,
            "fingerprint": self.fingerprint,
            "lastline": self.lastline,
            "duration": self.duration,
            "filesize": self.filesize,
            "filemodif": self.filemodif,
            "filemodifu": self.filemodifu,
        }

"""Log type models — how one kind of log file is split into fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from logtrail.tail.models import ScanRequest


@dataclass(frozen=True)
class LogType:
    """A complete log type definition."""

    name: str
    regex: str
    match: dict[str, Any] = field(default_factory=dict)
    types: dict[str, str] = field(default_factory=dict)
    exclude: dict[str, tuple[str, ...]] = field(default_factory=dict)
    multiline: str = ""
    block_start: str = ""
    description: str = ""
    inherit: tuple[str, ...] = ()

    def to_request(self, path: str | Path, **overrides: Any) -> ScanRequest:
        """Build a scan request for ``path``; keyword arguments override defaults."""
        params: dict[str, Any] = {
            "pattern": self.regex,
            "fields": dict(self.match),
            "types": dict(self.types),
            "exclude": {token: list(p) for token, p in self.exclude.items()},
            "multiline": self.multiline,
            "block_start": self.block_start,
        }
        params.update(overrides)
        return ScanRequest(path=str(path), **params)
